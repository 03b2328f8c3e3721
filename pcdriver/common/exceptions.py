"""
Custom Exception Classes for the PC Driver

Hierarchical exception structure for faults surfaced by the driver.
Every fault is raised synchronously to the immediate caller.
"""


class DriverError(Exception):
    """Base exception for all driver errors"""

    def __init__(self, message: str, recoverable: bool = True):
        self.message = message
        self.recoverable = recoverable
        super().__init__(message)


class ConfigError(DriverError):
    """Configuration-related errors"""

    def __init__(self, message: str, recoverable: bool = True):
        super().__init__(f"Config Error: {message}", recoverable)


class ServiceError(DriverError):
    """Base class for control service faults"""

    def __init__(
        self,
        message: str,
        service_name: str | None = None,
        recoverable: bool = True,
    ):
        self.service_name = service_name
        super().__init__(message, recoverable)


class InvalidRequestError(ServiceError):
    """Control payload is malformed or has no service name"""

    def __init__(self, message: str, service_name: str | None = None):
        super().__init__(f"Invalid Request: {message}", service_name, recoverable=False)


class ServiceNotImplementedError(ServiceError):
    """Requested service has no registered handler"""

    def __init__(self, service_name: str | None = None):
        super().__init__(
            f"Service not implemented: {service_name!r}",
            service_name,
            recoverable=False,
        )


class UnsupportedError(ServiceError):
    """Capability exists but is disabled or not allowed"""

    def __init__(self, message: str, service_name: str | None = None):
        super().__init__(f"Unsupported: {message}", service_name, recoverable=False)
