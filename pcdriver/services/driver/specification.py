"""
Capability Descriptor Builder

Builds the thing specification a managing system uses to register the
driver: which points can be read and which services can be invoked.
The document is rebuilt on every call and involves no I/O.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from pcdriver.services.system.metrics_collector import MetricField
from .dispatcher import ServiceKind
from .points import AccessMode

# Points offered for registration, in document order
CANONICAL_POINTS: tuple[str, ...] = (
    "CpuRate",
    "Memory",
    "AvailableMemory",
    "UplinkSpeed",
    "DownlinkSpeed",
    "Temperature",
    "Battery",
)


@dataclass(frozen=True)
class DataType:
    """Value type of a property or parameter"""
    type: str
    unit: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        if self.unit:
            data["specs"] = {"unit": self.unit}
        return data


@dataclass(frozen=True)
class PropertySpec:
    """A property (point) or a service parameter"""
    id: str
    name: str
    data_type: DataType
    access_mode: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
        }
        if self.access_mode:
            data["accessMode"] = self.access_mode
        data["dataType"] = self.data_type.to_dict()
        return data


@dataclass(frozen=True)
class ServiceSpec:
    """An invocable service with its input and output shapes"""
    id: str
    name: str
    input_data: tuple[PropertySpec, ...] = ()
    output_data: tuple[PropertySpec, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "inputData": [p.to_dict() for p in self.input_data],
            "outputData": [p.to_dict() for p in self.output_data],
        }


@dataclass(frozen=True)
class Profile:
    """Driver identity"""
    product_key: str
    version: str

    def to_dict(self) -> dict[str, Any]:
        return {"productKey": self.product_key, "version": self.version}


@dataclass(frozen=True)
class ThingSpec:
    """Capability document"""
    profile: Profile
    properties: tuple[PropertySpec, ...] = field(default_factory=tuple)
    services: tuple[ServiceSpec, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "profile": self.profile.to_dict(),
            "properties": [p.to_dict() for p in self.properties],
            "services": [s.to_dict() for s in self.services],
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


# Fixed service signatures, one per ServiceKind
SERVICE_SPECS: dict[ServiceKind, ServiceSpec] = {
    ServiceKind.SPEAK: ServiceSpec(
        id=ServiceKind.SPEAK.value,
        name="Voice broadcast",
        input_data=(PropertySpec("text", "text", DataType("text")),),
    ),
    ServiceKind.REBOOT: ServiceSpec(
        id=ServiceKind.REBOOT.value,
        name="Reboot computer",
        input_data=(PropertySpec("timeout", "timeout", DataType("int", "s")),),
        output_data=(PropertySpec("result", "result", DataType("int")),),
    ),
}


def build_property(metric: MetricField) -> PropertySpec:
    """Describe one provider field as a read-only property"""
    return PropertySpec(
        id=metric.name,
        name=metric.description or metric.name,
        data_type=DataType(metric.data_type, metric.unit),
        access_mode=AccessMode.READ_ONLY.value,
    )


def build_specification(
    provider_fields: tuple[MetricField, ...],
    product_key: str,
    version: str,
) -> ThingSpec:
    """
    Build the capability document.

    Canonical points the provider does not declare are dropped, so a
    host without e.g. a battery still produces a valid document.

    Args:
        provider_fields: Fields declared by the metrics provider type
        product_key: Driver product key
        version: Driver version

    Returns:
        Capability document
    """
    declared = {f.name: f for f in provider_fields}

    properties = tuple(
        build_property(declared[name])
        for name in CANONICAL_POINTS
        if name in declared
    )
    services = tuple(SERVICE_SPECS[kind] for kind in ServiceKind)

    return ThingSpec(
        profile=Profile(product_key=product_key, version=version),
        properties=properties,
        services=services,
    )
