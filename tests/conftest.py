"""Shared pytest fixtures for the PC driver test suite."""

from typing import Any

import pytest

from pcdriver.common.config import DriverSettings
from pcdriver.services.driver.service import PCDriver
from pcdriver.services.system.metrics_collector import (
    MACHINE_INFO_FIELDS,
    MachineInfo,
    machine_info_to_dict,
)


# =============================================================================
# Fake collaborators
# =============================================================================

class FakeProvider:
    """Metrics provider returning a fixed snapshot and counting reads"""

    FIELDS = MACHINE_INFO_FIELDS

    def __init__(self, info: MachineInfo | None = None):
        self.info = info or MachineInfo(
            os_name="Linux",
            cpu_rate=0.25,
            memory=8_000_000_000,
            available_memory=2_000_000_000,
            uplink_speed=1024,
            downlink_speed=4096,
            temperature=48.5,
            battery=None,
        )
        self.calls = 0

    def snapshot(self) -> dict[str, Any]:
        self.calls += 1
        return machine_info_to_dict(self.info, self.FIELDS)


class NoBatteryProvider(FakeProvider):
    """Provider type that does not declare Battery or Temperature"""

    FIELDS = tuple(
        f for f in MACHINE_INFO_FIELDS if f.name not in ("Battery", "Temperature")
    )


class RecordingSpeaker:
    def __init__(self):
        self.spoken: list[str] = []

    def speak(self, text: str) -> None:
        self.spoken.append(text)


class RecordingRebooter:
    def __init__(self, pid: int = 4321):
        self.pid = pid
        self.timeouts: list[int] = []

    def reboot(self, timeout: int = 0) -> int:
        self.timeouts.append(timeout)
        return self.pid


class FakeEngine:
    """Stands in for a pyttsx3 engine, recording what it was told to say"""

    def __init__(self, rate: int = 200):
        self.properties: dict[str, Any] = {"rate": rate}
        self.said: list[str] = []
        self.runs = 0

    def getProperty(self, name: str) -> Any:
        return self.properties[name]

    def setProperty(self, name: str, value: Any) -> None:
        self.properties[name] = value

    def say(self, text: str) -> None:
        self.said.append(text)

    def runAndWait(self) -> None:
        self.runs += 1


class FakeProcess:
    def __init__(self, pid: int | None):
        self.pid = pid


class FakePopen:
    """Stands in for subprocess.Popen, recording command lines"""

    def __init__(self, pid: int | None = 1234, error: Exception | None = None):
        self.pid = pid
        self.error = error
        self.commands: list[list[str]] = []

    def __call__(self, command, **kwargs):
        self.commands.append(list(command))
        if self.error is not None:
            raise self.error
        return FakeProcess(self.pid)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep host environment out of config loading"""
    for var in ("PCDRIVER_CONFIG", "PCDRIVER_ENABLE_REBOOT", "PCDRIVER_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def speaker() -> RecordingSpeaker:
    return RecordingSpeaker()


@pytest.fixture
def rebooter() -> RecordingRebooter:
    return RecordingRebooter()


@pytest.fixture
def make_driver(provider, speaker, rebooter):
    """Build a PCDriver wired to the fake collaborators"""

    def factory(enable_reboot: bool = False, **overrides) -> PCDriver:
        return PCDriver(
            settings=DriverSettings(enable_reboot=enable_reboot),
            provider=overrides.get("provider", provider),
            speaker=overrides.get("speaker", speaker),
            rebooter=overrides.get("rebooter", rebooter),
        )

    return factory
