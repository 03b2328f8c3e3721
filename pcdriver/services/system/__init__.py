"""
System Collaborators

Machine-facing pieces the driver calls out to:
- Metrics collection (CPU, memory, network, temperature, battery)
- Reboot command execution
- Text-to-speech playback
"""

from .metrics_collector import (
    MACHINE_INFO_FIELDS,
    MachineInfo,
    MetricField,
    MetricsProvider,
    SystemMetricsProvider,
    machine_info_to_dict,
)
from .reboot_handler import NO_PROCESS, UNSUPPORTED_PLATFORM, RebootHandler
from .speech import SpeechSynthesizer

__all__ = [
    "MACHINE_INFO_FIELDS",
    "MachineInfo",
    "MetricField",
    "MetricsProvider",
    "SystemMetricsProvider",
    "machine_info_to_dict",
    "NO_PROCESS",
    "UNSUPPORTED_PLATFORM",
    "RebootHandler",
    "SpeechSynthesizer",
]
