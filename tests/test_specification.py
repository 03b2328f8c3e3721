"""Tests for the thing specification."""

import json

from pcdriver.services.driver.specification import CANONICAL_POINTS, build_specification
from pcdriver.services.system.metrics_collector import MACHINE_INFO_FIELDS
from tests.conftest import NoBatteryProvider


def test_full_provider_declares_all_canonical_points(make_driver):
    spec = make_driver().get_specification()

    assert [p.id for p in spec.properties] == list(CANONICAL_POINTS)
    assert len(spec.properties) == 7


def test_descriptive_fields_are_not_registered(make_driver):
    ids = {p.id for p in make_driver().get_specification().properties}

    assert "OSName" not in ids
    assert "MachineName" not in ids


def test_all_properties_are_read_only(make_driver):
    spec = make_driver().get_specification()

    assert all(p.access_mode == "r" for p in spec.properties)


def test_undeclared_points_are_dropped(make_driver):
    spec = make_driver(provider=NoBatteryProvider()).get_specification()

    assert [p.id for p in spec.properties] == [
        "CpuRate", "Memory", "AvailableMemory", "UplinkSpeed", "DownlinkSpeed",
    ]


def test_exactly_two_services(make_driver):
    spec = make_driver().get_specification()

    assert [s.id for s in spec.services] == ["Speak", "Reboot"]

    speak, reboot = spec.services
    assert [p.id for p in speak.input_data] == ["text"]
    assert speak.output_data == ()
    assert [p.id for p in reboot.input_data] == ["timeout"]
    assert reboot.input_data[0].data_type.type == "int"
    assert reboot.output_data[0].data_type.type == "int"


def test_profile_comes_from_settings(make_driver):
    driver = make_driver()
    driver.settings.product_key = "PC-X"
    driver.settings.version = "9.9"

    profile = driver.get_specification().profile

    assert profile.product_key == "PC-X"
    assert profile.version == "9.9"


def test_specification_is_idempotent(make_driver, provider):
    driver = make_driver()

    assert driver.get_specification() == driver.get_specification()
    assert provider.calls == 0


def test_to_dict_uses_registry_keys():
    spec = build_specification(MACHINE_INFO_FIELDS, product_key="PC", version="1.0.0")

    data = json.loads(spec.to_json())

    assert data["profile"] == {"productKey": "PC", "version": "1.0.0"}
    memory = data["properties"][1]
    assert memory == {
        "id": "Memory",
        "name": "Total memory",
        "accessMode": "r",
        "dataType": {"type": "long", "specs": {"unit": "B"}},
    }
    assert data["services"][0]["inputData"] == [
        {"id": "text", "name": "text", "dataType": {"type": "text"}},
    ]
    assert data["services"][1]["outputData"][0]["dataType"] == {"type": "int"}
