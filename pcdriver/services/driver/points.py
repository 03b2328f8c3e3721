"""
Point Resolver

Matches requested point names against the fields a metrics provider
supplies and extracts only the requested subset.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pcdriver.common.logging_setup import get_service_logger, log_point_read
from pcdriver.services.system.metrics_collector import MetricsProvider

logger = get_service_logger("driver.points")


class AccessMode(str, Enum):
    """Point access modes"""
    READ_ONLY = "r"
    READ_WRITE = "rw"


@dataclass(frozen=True)
class Point:
    """A metric exposed for reading"""
    name: str
    address: str = ""
    access_mode: AccessMode = AccessMode.READ_ONLY


PointLike = Point | Mapping[str, Any] | str


def point_name(point: PointLike) -> str | None:
    """Get the name of a point descriptor. Only the name is ever consulted"""
    if isinstance(point, str):
        return point
    if isinstance(point, Point):
        return point.name
    if isinstance(point, Mapping):
        name = point.get("name") or point.get("Name")
        return name if isinstance(name, str) else None
    return getattr(point, "name", None)


class PointResolver:
    """Reads requested points from a metrics provider"""

    def __init__(self, provider: MetricsProvider):
        self.provider = provider

    def read(self, points: Iterable[PointLike] | None) -> dict[str, Any]:
        """
        Read the requested points.

        Matching is case-insensitive; result keys keep the caller's casing.
        Names the provider does not supply are left out.

        Args:
            points: Point names or descriptors, may be empty

        Returns:
            Dict mapping requested name to value
        """
        # lowered name -> requested spelling; first spelling wins
        requested: dict[str, str] = {}
        for point in points or ():
            name = point_name(point)
            if name:
                requested.setdefault(name.lower(), name)

        if not requested:
            return {}

        snapshot = self.provider.snapshot()

        result = {}
        for field_name, value in snapshot.items():
            if value is None:
                continue
            name = requested.get(field_name.lower())
            if name is not None:
                result[name] = value

        log_point_read(logger, len(requested), result)
        return result
