"""
Attribute value states.

A scalar attribute slot holds either inline data (`Inline`) or a forward
reference to a resource that has not been fetched yet (`Stub`). Reading a
stub resolves it once and the slot becomes `Inline` for good.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Tuple, Union

from mediafs.schemas.wire import REPRESENTATION_KEY, TYPE_TAG_KEY
from mediafs.util.paths import format_representation, parse_representation


@dataclass(frozen=True)
class Inline:
    value: Any


@dataclass(frozen=True)
class Stub:
    """Forward reference to the resource at `path`."""

    path: Tuple[str, ...]

    @classmethod
    def from_wire(cls, payload: Mapping) -> "Stub":
        return cls(parse_representation(payload[REPRESENTATION_KEY]))

    @property
    def representation(self) -> str:
        return format_representation(self.path)

    def to_wire(self) -> dict:
        return {REPRESENTATION_KEY: self.representation}


AttributeValue = Union[Inline, Stub]


def is_stub_payload(value: Any) -> bool:
    """True for an untyped mapping carrying a representation path."""
    return (
        isinstance(value, Mapping)
        and isinstance(value.get(REPRESENTATION_KEY), str)
        and TYPE_TAG_KEY not in value
    )


def wrap(value: Any) -> AttributeValue:
    if isinstance(value, (Inline, Stub)):
        return value
    if is_stub_payload(value):
        return Stub.from_wire(value)
    return Inline(value)
