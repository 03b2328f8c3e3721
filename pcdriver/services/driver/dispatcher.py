"""
Service Dispatcher

Decodes a control request into a service name plus input payload and
routes it to one of a closed set of services:
- Speak: text-to-speech, returns "OK"
- Reboot: restart the machine (only when enabled), returns the process id
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Protocol

from pcdriver.common.exceptions import (
    InvalidRequestError,
    ServiceError,
    ServiceNotImplementedError,
    UnsupportedError,
)
from pcdriver.common.logging_setup import get_service_logger, log_service_call

logger = get_service_logger("driver.dispatcher")

OK = "OK"


class ServiceKind(str, Enum):
    """Services the driver exposes. Values are the wire names"""
    SPEAK = "Speak"
    REBOOT = "Reboot"


class Speaker(Protocol):
    def speak(self, text: str) -> None:
        ...


class Rebooter(Protocol):
    def reboot(self, timeout: int = 0) -> int:
        ...


def _lookup(parameters: Mapping[str, Any], key: str) -> Any:
    """Case-insensitive key lookup, exact match preferred"""
    if key in parameters:
        return parameters[key]
    lowered = key.lower()
    for k, v in parameters.items():
        if isinstance(k, str) and k.lower() == lowered:
            return v
    return None


def _encode_input(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value)
    return str(value)


@dataclass(frozen=True)
class ServiceRequest:
    """Wire-level shape of a control call"""
    name: str
    input_data: str = ""
    id: int | None = None

    @classmethod
    def from_parameters(cls, parameters: Any) -> "ServiceRequest":
        """
        Decode a raw parameter mapping ({"Name": ..., "InputData": ...}).

        Raises:
            InvalidRequestError: not a mapping, or no usable service name
        """
        if not isinstance(parameters, Mapping):
            raise InvalidRequestError(
                f"expected a mapping, got {type(parameters).__name__}"
            )

        name = _lookup(parameters, "Name")
        if not isinstance(name, str) or not name:
            raise InvalidRequestError("missing service name")

        request_id = _lookup(parameters, "Id")
        try:
            request_id = int(request_id) if request_id is not None else None
        except (TypeError, ValueError):
            request_id = None

        return cls(
            name=name,
            input_data=_encode_input(_lookup(parameters, "InputData")),
            id=request_id,
        )


def parse_timeout(input_data: str) -> int:
    """Parse a reboot timeout. Anything non-numeric or negative becomes 0"""
    try:
        timeout = int(str(input_data).strip())
    except ValueError:
        return 0
    return max(timeout, 0)


class ServiceDispatcher:
    """
    Routes control requests to the registered services.

    The service table is built once in __init__ and never changes.
    """

    def __init__(
        self,
        speaker: Speaker,
        rebooter: Rebooter,
        enable_reboot: bool = False,
    ):
        self.speaker = speaker
        self.rebooter = rebooter
        self.enable_reboot = enable_reboot

        self._handlers: dict[ServiceKind, Callable[[ServiceRequest], str]] = {
            ServiceKind.SPEAK: self._speak,
            ServiceKind.REBOOT: self._reboot,
        }

    @property
    def service_names(self) -> list[str]:
        return [kind.value for kind in self._handlers]

    def control(self, parameters: Any) -> str:
        """
        Decode and execute one control request.

        Args:
            parameters: Raw mapping with Name and InputData

        Returns:
            Service result as string

        Raises:
            InvalidRequestError: payload does not decode
            ServiceNotImplementedError: unknown service name
            UnsupportedError: service is disabled
        """
        request = ServiceRequest.from_parameters(parameters)
        return self.dispatch(request)

    def dispatch(self, request: ServiceRequest) -> str:
        """Execute an already decoded request"""
        try:
            kind = ServiceKind(request.name)
        except ValueError:
            error = ServiceNotImplementedError(request.name)
            log_service_call(logger, request.name, error=error, request_id=request.id)
            raise error from None

        try:
            result = self._handlers[kind](request)
        except ServiceError as e:
            log_service_call(logger, request.name, error=e, request_id=request.id)
            raise

        log_service_call(logger, request.name, result=result, request_id=request.id)
        return result

    def _speak(self, request: ServiceRequest) -> str:
        self.speaker.speak(request.input_data)
        return OK

    def _reboot(self, request: ServiceRequest) -> str:
        if not self.enable_reboot:
            raise UnsupportedError("reboot not enabled", request.name)

        timeout = parse_timeout(request.input_data)
        return str(self.rebooter.reboot(timeout))
