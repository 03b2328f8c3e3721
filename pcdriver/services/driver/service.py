"""
PC Driver

IoT driver that turns the local computer into a device:
- Read: CPU, memory, network, temperature and battery points
- Control: voice broadcast and (when enabled) reboot services
- GetSpecification: thing specification for registration

All operations are synchronous request/response calls with no shared
mutable state; collaborators are injected at construction.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from pcdriver.common.config import DRIVER_CODE, DriverSettings
from pcdriver.common.exceptions import UnsupportedError
from pcdriver.common.logging_setup import get_service_logger, set_log_level
from pcdriver.services.system.metrics_collector import (
    MetricsProvider,
    SystemMetricsProvider,
)
from pcdriver.services.system.reboot_handler import RebootHandler
from pcdriver.services.system.speech import SpeechSynthesizer
from .dispatcher import Rebooter, ServiceDispatcher, Speaker
from .points import PointLike, PointResolver, point_name
from .specification import ThingSpec, build_specification

logger = get_service_logger("driver")

# Driver code -> driver class
_DRIVERS: dict[str, type] = {}


def register_driver(code: str) -> Callable[[type], type]:
    """Class decorator registering a driver under its code"""

    def decorator(cls: type) -> type:
        if code in _DRIVERS and _DRIVERS[code] is not cls:
            raise ValueError(f"Driver code already registered: {code}")
        _DRIVERS[code] = cls
        cls.DRIVER_CODE = code
        return cls

    return decorator


def get_driver_class(code: str) -> type:
    """Look up a registered driver class by code"""
    try:
        return _DRIVERS[code]
    except KeyError:
        raise KeyError(f"No driver registered for code {code!r}") from None


def list_drivers() -> list[str]:
    return sorted(_DRIVERS)


@dataclass
class PCParameter:
    """Per-node driver parameters"""
    timeout_ms: int = 3000  # Suggested polling timeout for callers

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "PCParameter":
        data = data or {}
        return cls(timeout_ms=int(data.get("timeout_ms", data.get("Timeout", 3000))))


@dataclass
class Node:
    """An opened driver node"""
    driver: "PCDriver"
    parameter: PCParameter = field(default_factory=PCParameter)


@register_driver(DRIVER_CODE)
class PCDriver:
    """
    PC driver.

    Collaborators default to the real machine implementations built from
    settings; tests pass fakes instead.
    """

    DRIVER_CODE = DRIVER_CODE
    DISPLAY_NAME = "PC driver"

    def __init__(
        self,
        settings: DriverSettings | None = None,
        provider: MetricsProvider | None = None,
        speaker: Speaker | None = None,
        rebooter: Rebooter | None = None,
    ):
        self.settings = settings or DriverSettings()
        set_log_level(self.settings.log_level)

        self.provider = provider or SystemMetricsProvider(
            cpu_sample_seconds=self.settings.cpu_sample_seconds,
        )
        self.speaker = speaker or SpeechSynthesizer(rate=self.settings.speech_rate)
        self.rebooter = rebooter or RebootHandler()

        self.resolver = PointResolver(self.provider)
        self.dispatcher = ServiceDispatcher(
            speaker=self.speaker,
            rebooter=self.rebooter,
            enable_reboot=self.settings.enable_reboot,
        )

    def get_default_parameter(self) -> PCParameter:
        return PCParameter()

    def open(self, parameters: dict[str, Any] | None = None) -> Node:
        """Open a node carrying the given parameters"""
        node = Node(driver=self, parameter=PCParameter.from_dict(parameters))
        logger.info(
            f"Opened {self.DRIVER_CODE} node",
            extra={"timeout_ms": node.parameter.timeout_ms},
        )
        return node

    def close(self, node: Node) -> None:
        logger.info(f"Closed {self.DRIVER_CODE} node")

    def read(self, node: Node | None, points: Iterable[PointLike] | None) -> dict[str, Any]:
        """
        Read point values.

        Args:
            node: Node from open(), not consulted
            points: Point names or descriptors

        Returns:
            Dict mapping requested name to value, unknown names omitted
        """
        return self.resolver.read(points)

    def write(self, node: Node | None, point: PointLike, value: Any) -> None:
        """Points are read-only; always raises UnsupportedError"""
        raise UnsupportedError(f"point {point_name(point)!r} is read-only")

    def control(self, node: Node | None, parameters: Any) -> str:
        """
        Invoke a service.

        Args:
            node: Node from open(), not consulted
            parameters: Mapping with Name and InputData

        Returns:
            "OK" for Speak, process id string for Reboot
        """
        return self.dispatcher.control(parameters)

    def get_specification(self) -> ThingSpec:
        """Build the thing specification for this driver"""
        return build_specification(
            provider_fields=self.provider.FIELDS,
            product_key=self.settings.product_key,
            version=self.settings.version,
        )
