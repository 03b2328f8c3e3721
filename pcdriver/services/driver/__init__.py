"""
Driver Service

Point reading, service dispatch and self-description for the PC driver.
"""

from .dispatcher import ServiceDispatcher, ServiceKind, ServiceRequest
from .points import AccessMode, Point, PointResolver
from .service import (
    Node,
    PCDriver,
    PCParameter,
    get_driver_class,
    list_drivers,
    register_driver,
)
from .specification import (
    CANONICAL_POINTS,
    DataType,
    Profile,
    PropertySpec,
    ServiceSpec,
    ThingSpec,
    build_specification,
)

__all__ = [
    "ServiceDispatcher",
    "ServiceKind",
    "ServiceRequest",
    "AccessMode",
    "Point",
    "PointResolver",
    "Node",
    "PCDriver",
    "PCParameter",
    "get_driver_class",
    "list_drivers",
    "register_driver",
    "CANONICAL_POINTS",
    "DataType",
    "Profile",
    "PropertySpec",
    "ServiceSpec",
    "ThingSpec",
    "build_specification",
]
