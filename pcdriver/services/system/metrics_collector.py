"""
System Metrics Collector

Collects the machine metrics exposed as driver points:
- CPU rate
- Total and available memory
- Uplink and downlink speed
- Temperature
- Battery level

Also carries descriptive fields (OS name/version, processor, machine name).
Each snapshot is produced fresh; nothing is cached between reads.
"""

import platform
import threading
import time
from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Callable, Protocol

import psutil


@dataclass
class MachineInfo:
    """One snapshot of machine metrics. None means unavailable on this host"""
    os_name: str | None = None
    os_version: str | None = None
    processor: str | None = None
    machine_name: str | None = None
    cpu_rate: float | None = None  # 0.0 - 1.0
    memory: int | None = None  # bytes
    available_memory: int | None = None  # bytes
    uplink_speed: int | None = None  # bytes/s
    downlink_speed: int | None = None  # bytes/s
    temperature: float | None = None  # Celsius
    battery: float | None = None  # 0.0 - 1.0


@dataclass(frozen=True)
class MetricField:
    """A named metric a provider can supply"""
    name: str
    accessor: Callable[[MachineInfo], Any]
    data_type: str
    unit: str = ""
    description: str = ""


# Static name -> accessor table. Order is the order of snapshot keys.
MACHINE_INFO_FIELDS: tuple[MetricField, ...] = (
    MetricField("OSName", attrgetter("os_name"), "text", description="Operating system"),
    MetricField("OSVersion", attrgetter("os_version"), "text", description="OS version"),
    MetricField("Processor", attrgetter("processor"), "text", description="Processor"),
    MetricField("MachineName", attrgetter("machine_name"), "text", description="Machine name"),
    MetricField("CpuRate", attrgetter("cpu_rate"), "float", description="CPU rate"),
    MetricField("Memory", attrgetter("memory"), "long", "B", "Total memory"),
    MetricField("AvailableMemory", attrgetter("available_memory"), "long", "B", "Available memory"),
    MetricField("UplinkSpeed", attrgetter("uplink_speed"), "long", "B/s", "Uplink speed"),
    MetricField("DownlinkSpeed", attrgetter("downlink_speed"), "long", "B/s", "Downlink speed"),
    MetricField("Temperature", attrgetter("temperature"), "double", "°C", "Temperature"),
    MetricField("Battery", attrgetter("battery"), "double", description="Battery level"),
)


class MetricsProvider(Protocol):
    """Anything that declares its fields and returns a flat snapshot"""

    FIELDS: tuple[MetricField, ...]

    def snapshot(self) -> dict[str, Any]:
        ...


def machine_info_to_dict(
    info: MachineInfo,
    fields: tuple[MetricField, ...] = MACHINE_INFO_FIELDS,
) -> dict[str, Any]:
    """Flatten a MachineInfo into name -> value, skipping unavailable values"""
    result = {}
    for f in fields:
        value = f.accessor(info)
        if value is not None:
            result[f.name] = value
    return result


class SystemMetricsProvider:
    """Collects metrics from the local machine via psutil"""

    FIELDS = MACHINE_INFO_FIELDS

    # Thermal zones checked before psutil (Linux / Raspberry Pi)
    THERMAL_PATHS = (
        "/sys/class/thermal/thermal_zone0/temp",
        "/sys/devices/virtual/thermal/thermal_zone0/temp",
    )

    def __init__(
        self,
        cpu_sample_seconds: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.cpu_sample_seconds = cpu_sample_seconds
        self._clock = clock
        self._net_lock = threading.Lock()
        self._last_net: tuple[float, int, int] | None = None

    def collect(self) -> MachineInfo:
        """Collect current machine metrics"""
        mem = psutil.virtual_memory()
        uplink, downlink = self._get_link_speeds()

        return MachineInfo(
            os_name=platform.system() or None,
            os_version=platform.release() or None,
            processor=platform.processor() or platform.machine() or None,
            machine_name=platform.node() or None,
            cpu_rate=self._get_cpu_rate(),
            memory=int(mem.total),
            available_memory=int(mem.available),
            uplink_speed=uplink,
            downlink_speed=downlink,
            temperature=self._get_temperature(),
            battery=self._get_battery(),
        )

    def snapshot(self) -> dict[str, Any]:
        """Collect metrics as a flat name -> value mapping"""
        return machine_info_to_dict(self.collect(), self.FIELDS)

    def _get_cpu_rate(self) -> float:
        """Get CPU usage as a 0-1 ratio"""
        return round(psutil.cpu_percent(interval=self.cpu_sample_seconds) / 100, 4)

    def _get_link_speeds(self) -> tuple[int, int]:
        """
        Get (uplink, downlink) speed in bytes per second.

        Speeds are the counter delta since the previous call, so the
        first call on a fresh provider reports 0.
        """
        counters = psutil.net_io_counters()
        if counters is None:
            return 0, 0

        now = self._clock()
        with self._net_lock:
            last = self._last_net
            self._last_net = (now, counters.bytes_sent, counters.bytes_recv)

        if last is None:
            return 0, 0

        elapsed = now - last[0]
        if elapsed <= 0:
            return 0, 0

        # Counters can wrap or reset when an interface goes away
        sent = max(counters.bytes_sent - last[1], 0)
        recv = max(counters.bytes_recv - last[2], 0)
        return int(sent / elapsed), int(recv / elapsed)

    def _get_temperature(self) -> float | None:
        """Get CPU temperature in Celsius"""
        for path in self.THERMAL_PATHS:
            try:
                with open(path, "r") as f:
                    temp_str = f.read().strip()
                    # Temperature is in millidegrees
                    return round(int(temp_str) / 1000, 1)
            except (FileNotFoundError, IOError, ValueError):
                continue

        # sensors_temperatures only exists on Linux/FreeBSD
        sensors = getattr(psutil, "sensors_temperatures", None)
        if sensors is None:
            return None

        try:
            temps = sensors()
        except (OSError, RuntimeError):
            return None

        for entries in (temps or {}).values():
            if entries:
                return round(entries[0].current, 1)

        return None

    def _get_battery(self) -> float | None:
        """Get battery level as a 0-1 ratio, None without a battery"""
        sensors = getattr(psutil, "sensors_battery", None)
        if sensors is None:
            return None

        try:
            battery = sensors()
        except (OSError, RuntimeError):
            return None

        if battery is None:
            return None
        return round(battery.percent / 100, 4)
