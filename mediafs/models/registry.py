"""
Asset type registry.

Every asset type gets one `TypeRecord`, created when the class is defined.
The record holds the type's descriptor table (own entries plus everything
inherited), its wire type tag and any per-type state, such as a cached
listing. `TypeRegistry` maps type tags back to types for polymorphic decode.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from mediafs.core.errors import DeclarationError, UnknownTypeTag

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_NON_IDENTIFIER = re.compile(r"[^0-9a-zA-Z_]+")


def to_method_name(key: str) -> str:
    """
    Converts a wire attribute key into a Python accessor name.

    Examples:
        >>> to_method_name("PreviewLength")
        'preview_length'
        >>> to_method_name("SHA1DigestBase64")
        'sha1_digest_base64'
        >>> to_method_name("mime-type")
        'mime_type'
    """

    name = _CAMEL_BOUNDARY.sub("_", key)
    name = _NON_IDENTIFIER.sub("_", name).strip("_").lower()
    if not name:
        raise DeclarationError(f"Attribute key {key!r} does not map to a usable accessor name")
    if name[0].isdigit():
        name = f"_{name}"
    return name


@dataclass
class TypeRecord:
    """
    Per-type registry entry.

    Attributes:
        asset_type: The class this record belongs to.
        type_tag: Value of the wire type-tag field for this class.
        descriptors: Accessor name -> attribute descriptor declared on this
            class itself. Inherited entries live on the ancestors' records.
        listing: Cached collection for types that support `synchronize`.
            None until the first synchronisation.
    """

    asset_type: type
    type_tag: str
    descriptors: Dict[str, Any] = field(default_factory=dict)
    listing: Optional[list] = None


class TypeRegistry:
    """Explicit type tag -> asset type mapping, plus one `TypeRecord` per type."""

    def __init__(self):
        self._records: Dict[type, TypeRecord] = {}
        self._by_tag: Dict[str, type] = {}

    def register(self, asset_type: type, type_tag: str) -> TypeRecord:
        existing = self._by_tag.get(type_tag)
        if existing is not None and existing is not asset_type:
            logger.warning("Type tag %r re-registered: %s replaces %s",
                           type_tag, asset_type.__qualname__, existing.__qualname__)

        record = TypeRecord(asset_type=asset_type, type_tag=type_tag)
        self._records[asset_type] = record
        self._by_tag[type_tag] = asset_type
        return record

    def unregister(self, asset_type: type, previous: Optional[type] = None) -> None:
        """
        Removes `asset_type` from the registry.

        Args:
            asset_type (type): The type to drop.
            previous (type, optional): Type that held the same tag before
                `asset_type` replaced it. It gets the tag back.
        """
        record = self._records.pop(asset_type, None)
        if record is None:
            return
        if self._by_tag.get(record.type_tag) is asset_type:
            if previous is not None:
                self._by_tag[record.type_tag] = previous
            else:
                del self._by_tag[record.type_tag]

    def get(self, type_tag: str) -> Optional[type]:
        return self._by_tag.get(type_tag)

    def record(self, asset_type: type) -> TypeRecord:
        return self._records[asset_type]

    def descriptors(self, asset_type: type) -> Dict[str, Any]:
        """Accessor name -> descriptor for `asset_type` and all its ancestors."""
        table: Dict[str, Any] = {}
        for klass in reversed(asset_type.__mro__):
            record = self._records.get(klass)
            if record is not None:
                table.update(record.descriptors)
        return table

    def descriptor_for(self, asset_type: type, key: str):
        """Looks a descriptor up by wire key or accessor name, None if undeclared."""
        if not isinstance(key, str):
            return None
        try:
            name = to_method_name(key)
        except DeclarationError:
            return None
        for klass in asset_type.__mro__:
            record = self._records.get(klass)
            if record is not None and name in record.descriptors:
                return record.descriptors[name]
        return None

    def lookup(self, type_tag: str) -> type:
        """
        Returns the asset type registered for `type_tag`.

        Raises:
            UnknownTypeTag: If no type was registered under that tag.
        """
        try:
            return self._by_tag[type_tag]
        except (KeyError, TypeError):
            raise UnknownTypeTag(type_tag) from None

    def __contains__(self, type_tag) -> bool:
        return type_tag in self._by_tag


asset_types = TypeRegistry()
"""Registry shared by every `Asset` subclass."""
