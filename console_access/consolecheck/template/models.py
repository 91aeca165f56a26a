"""Typed, read-only view over a CloudFormation template's resources.

Raw property bags are converted once into a closed set of ``Value`` nodes so
that rules never have to poke at arbitrary nested dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

REGION_PSEUDO_PARAMETER = "AWS::Region"

INTERFACE_ENDPOINT = "Interface"
GATEWAY_ENDPOINT = "Gateway"

MAX_NESTING_DEPTH = 64


@dataclass(frozen=True)
class LiteralValue:
    """A plain scalar: string, number or boolean."""

    value: str | int | float | bool


@dataclass(frozen=True)
class JoinValue:
    """``{"Fn::Join": [separator, [parts...]]}``."""

    separator: str
    parts: tuple[Value, ...] = ()


@dataclass(frozen=True)
class RefValue:
    """``{"Ref": name}``, a parameter, resource or pseudo-parameter reference."""

    name: str


@dataclass(frozen=True)
class MappingValue:
    """A nested object that is not a recognised intrinsic function."""

    entries: dict[str, Value] = field(default_factory=dict)

    def get(self, key: str) -> Value | None:
        return self.entries.get(key)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class SequenceValue:
    """A list of values (ingress rules, policy statements, ...)."""

    items: tuple[Value, ...] = ()

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class UnknownValue:
    """Any shape the model does not recognise. Never resolves."""

    raw: Any = None


Value = Union[LiteralValue, JoinValue, RefValue, MappingValue, SequenceValue, UnknownValue]


def parse_value(raw: Any) -> Value:
    """Convert a decoded JSON/YAML node into a ``Value``.

    Total over arbitrary input: anything unexpected becomes ``UnknownValue``.
    Nodes nested deeper than ``MAX_NESTING_DEPTH`` (including self-referential
    YAML aliases) are cut off as ``UnknownValue``.
    """
    return _parse(raw, 0)


def _parse(raw: Any, depth: int) -> Value:
    if isinstance(raw, (str, int, float)):
        return LiteralValue(raw)

    if depth >= MAX_NESTING_DEPTH:
        return UnknownValue(raw)

    if isinstance(raw, list):
        return SequenceValue(tuple(_parse(item, depth + 1) for item in raw))

    if isinstance(raw, dict):
        if len(raw) == 1:
            key, arg = next(iter(raw.items()))
            if key == "Ref":
                return RefValue(arg) if isinstance(arg, str) else UnknownValue(raw)
            if key == "Fn::Join":
                return _parse_join(raw, arg, depth)
            if isinstance(key, str) and key.startswith("Fn::"):
                return UnknownValue(raw)
        return MappingValue({str(k): _parse(v, depth + 1) for k, v in raw.items()})

    return UnknownValue(raw)


def _parse_join(raw: dict, arg: Any, depth: int) -> Value:
    if not isinstance(arg, list) or len(arg) != 2:
        return UnknownValue(raw)
    separator, parts = arg
    if not isinstance(separator, str) or not isinstance(parts, list):
        return UnknownValue(raw)
    return JoinValue(separator, tuple(_parse(p, depth + 1) for p in parts))


def is_truthy(value: Value | None) -> bool:
    """CloudFormation-flavoured truthiness for flag properties.

    Literal strings follow CloudFormation's boolean coercion, so ``"false"``
    is falsy. Intrinsic functions are assumed set.
    """
    if value is None:
        return False
    if isinstance(value, LiteralValue):
        if isinstance(value.value, str):
            return value.value != "" and value.value.lower() != "false"
        return bool(value.value)
    if isinstance(value, (MappingValue, SequenceValue)):
        return len(value) > 0
    if isinstance(value, (JoinValue, RefValue)):
        return True
    return bool(value.raw)


def literal(value: Value | None) -> str | int | float | bool | None:
    """Return the scalar inside a ``LiteralValue``, else ``None``."""
    if isinstance(value, LiteralValue):
        return value.value
    return None


@dataclass(frozen=True)
class Resource:
    """A single entry under ``Resources``."""

    logical_id: str
    type: str
    properties: MappingValue = field(default_factory=MappingValue)

    def prop(self, name: str) -> Value | None:
        return self.properties.get(name)

    @property
    def endpoint_type(self) -> str | None:
        value = literal(self.prop("VpcEndpointType"))
        return value if isinstance(value, str) else None


class Template:
    """The resource collection of a template, in document order."""

    def __init__(self, resources: dict[str, Resource] | None = None) -> None:
        self._resources: dict[str, Resource] = dict(resources or {})

    @classmethod
    def from_dict(cls, document: Any) -> Template:
        """Build a template from a decoded document.

        A missing or non-mapping ``Resources`` section yields an empty
        template. The input is never modified.
        """
        resources: dict[str, Resource] = {}
        raw_resources = document.get("Resources") if isinstance(document, dict) else None
        if not isinstance(raw_resources, dict):
            return cls(resources)

        for logical_id, body in raw_resources.items():
            resources[str(logical_id)] = _parse_resource(str(logical_id), body)
        return cls(resources)

    @property
    def resources(self) -> dict[str, Resource]:
        return dict(self._resources)

    def __len__(self) -> int:
        return len(self._resources)

    def of_type(self, resource_type: str) -> list[Resource]:
        """All resources of the given ``Type``, in document order."""
        return [r for r in self._resources.values() if r.type == resource_type]

    def vpc_endpoints(self, endpoint_type: str) -> list[Resource]:
        """``AWS::EC2::VPCEndpoint`` resources with an explicit endpoint type."""
        return [
            r for r in self.of_type("AWS::EC2::VPCEndpoint")
            if r.endpoint_type == endpoint_type
        ]


def _parse_resource(logical_id: str, body: Any) -> Resource:
    if not isinstance(body, dict):
        return Resource(logical_id=logical_id, type="")

    resource_type = body.get("Type")
    properties = parse_value(body.get("Properties"))
    if not isinstance(properties, MappingValue):
        properties = MappingValue()

    return Resource(
        logical_id=logical_id,
        type=resource_type if isinstance(resource_type, str) else "",
        properties=properties,
    )
