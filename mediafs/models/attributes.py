"""
Attribute declarations.

An asset type lists the wire keys it understands, and each key becomes a
Python data descriptor on the class:

    - `ScalarAttribute` stores the written value as-is. When the stored value
      is a representation stub, the first read fetches the referenced
      resource and keeps the result, so later reads make no request.
    - `CollectionAttribute` holds a sequence of nested assets. Raw wire
      mappings are decoded into assets as soon as they are written; elements
      that already are assets are stored unchanged. Reading an unset
      collection gives an empty list.

Descriptors are recorded in the type's `TypeRecord`, which is what payload
decoding consults to decide which keys to apply.
"""

import logging
from typing import Any, Iterable, Mapping, Optional

from mediafs.core.errors import DeclarationError
from mediafs.models.registry import asset_types, to_method_name
from mediafs.models.values import Inline, Stub, is_stub_payload, wrap
from mediafs.schemas.wire import RESERVED_KEYS
from mediafs.services import codec
from mediafs.transport import get_transport

logger = logging.getLogger(__name__)


class AttributeDescriptor:
    """Base class binding a wire key to an accessor on an asset type."""

    kind = "attribute"

    def __init__(self, key: str, name: str):
        self.key = key
        self.name = name

    def __repr__(self):
        return f"<{type(self).__name__} {self.name} -> {self.key!r}>"


class ScalarAttribute(AttributeDescriptor):
    kind = "scalar"

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        slot = instance.wire_values().get(self.key)
        if slot is None:
            return None
        if isinstance(slot, Stub):
            return self._resolve(instance, slot)
        return slot.value

    def __set__(self, instance, value):
        instance.wire_values()[self.key] = wrap(value)

    def _resolve(self, instance, stub: Stub):
        logger.debug("Resolving %s.%s from %s", type(instance).__name__, self.name, stub.representation)
        resolved = get_transport().get(stub.path)

        values = instance.wire_values()
        current = values.get(self.key)
        if isinstance(current, Inline):
            # already resolved while we were fetching
            return current.value
        values[self.key] = Inline(resolved)
        return resolved


class CollectionAttribute(AttributeDescriptor):
    kind = "collection"

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        slot = instance.wire_values().get(self.key)
        if slot is None or slot.value is None:
            return []
        return slot.value

    def __set__(self, instance, values: Optional[Iterable]):
        if values is None:
            instance.wire_values()[self.key] = Inline(None)
            return
        instance.wire_values()[self.key] = Inline([self._coerce(v) for v in values])

    @staticmethod
    def _coerce(value: Any):
        if codec.is_asset(value):
            return value
        if is_stub_payload(value):
            return get_transport().get(Stub.from_wire(value).path)
        if isinstance(value, Mapping):
            return codec.decode(value)
        return value


# ------------------------------------------------------------------------------
# Declaration helpers
# ------------------------------------------------------------------------------

def declare_attributes(asset_type: type, *keys: str) -> None:
    """
    Declares scalar wire attributes on an asset type.

    Example:
        >>> declare_attributes(Encoding, "Name", "Codec", "PreviewLength")
        >>> Encoding(Name="mp3").preview_length is None
        True

    Raises:
        DeclarationError: If a key is reserved (`__CLASS__`,
            `__REPRESENTATION__`) or its accessor name is already taken.
    """
    _declare(asset_type, keys, ScalarAttribute)


def declare_collections(asset_type: type, *keys: str) -> None:
    """Declares collection-of-asset wire attributes on an asset type."""
    _declare(asset_type, keys, CollectionAttribute)


def _declare(asset_type: type, keys, descriptor_class) -> None:
    record = asset_types.record(asset_type)
    inherited = asset_types.descriptors(asset_type)

    for key in keys:
        if not isinstance(key, str):
            raise DeclarationError(f"Attribute keys must be strings, got {key!r}")
        if key in RESERVED_KEYS:
            raise DeclarationError(f"{key!r} is reserved by the wire format and cannot be declared")

        name = to_method_name(key)
        existing = inherited.get(name)
        if existing is not None and existing.key != key:
            raise DeclarationError(
                f"{asset_type.__name__}: {key!r} and {existing.key!r} both map to accessor {name!r}"
            )
        if existing is None and hasattr(asset_type, name):
            raise DeclarationError(f"{asset_type.__name__}: accessor {name!r} for {key!r} shadows an existing member")

        descriptor = descriptor_class(key, name)
        record.descriptors[name] = descriptor
        inherited[name] = descriptor
        setattr(asset_type, name, descriptor)
