"""Tests for the command-line tool."""

import json

import pytest

from pcdriver import cli
from pcdriver.common.config import DriverSettings
from pcdriver.services.driver.service import PCDriver


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_spec_command(capsys):
    assert cli.main(["spec"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["profile"]["productKey"] == "PC"
    assert [s["id"] for s in data["services"]] == ["Speak", "Reboot"]


def test_read_command_uses_driver(make_driver):
    args = cli.build_parser().parse_args(["read", "CpuRate", "memory", "Voltage"])

    assert cli.run(args, make_driver()) == {"CpuRate": 0.25, "memory": 8_000_000_000}


def test_control_command_uses_driver(make_driver, speaker):
    args = cli.build_parser().parse_args(["control", "Speak", "--input", "hi there"])

    assert cli.run(args, make_driver()) == {"result": "OK"}
    assert speaker.spoken == ["hi there"]


def test_reboot_disabled_by_default(capsys, monkeypatch):
    created = []

    def factory(settings):
        driver = PCDriver(settings=settings, rebooter=object())
        created.append(driver)
        return driver

    monkeypatch.setattr(cli, "PCDriver", factory)

    assert cli.main(["control", "Reboot", "--input", "5"]) == 1

    data = json.loads(capsys.readouterr().out)
    assert data["type"] == "UnsupportedError"
    assert "reboot not enabled" in data["error"]
    assert created[0].settings == DriverSettings()


def test_unknown_service_exits_nonzero(capsys):
    assert cli.main(["control", "Unknown"]) == 1

    assert json.loads(capsys.readouterr().out)["type"] == "ServiceNotImplementedError"


def test_bad_config_exits_nonzero(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text("driver: [unclosed\n")

    assert cli.main(["--config", str(path), "spec"]) == 1

    assert json.loads(capsys.readouterr().out)["type"] == "ConfigError"


def test_unreadable_config_exits_nonzero(tmp_path, capsys):
    assert cli.main(["--config", str(tmp_path), "spec"]) == 1

    assert json.loads(capsys.readouterr().out)["type"] == "ConfigError"
