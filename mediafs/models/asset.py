"""
Asset model definition.

This module defines `Asset`, the base class of every server-side object
exposed by the media file server. A concrete asset type declares:

    - the wire attributes it carries (`api_attributes`),
    - the attributes holding nested assets (`api_collections`),
    - how to derive its URL path (`resolve_path`).

From that, every type gets construction from wire payloads, lazy loading of
nested resources, equality by path and the network verbs (`get`, `post`,
`put`, `delete`, ...), which go through the installed transport.

Example:
    >>> class Widget(Asset, type_tag="MFS::Widget"):
    ...     api_attributes = ("Name", "Colour")
    ...
    ...     @classmethod
    ...     def resolve_path(cls, instance=None):
    ...         if instance is None:
    ...             return ["widget"]
    ...         if instance.name:
    ...             return ["widget", instance.name]
    ...         return None
    >>> Widget(Name="acme").path_components()
    ('widget', 'acme')
"""

import logging
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple

from mediafs.core.errors import DeclarationError, NotFound, PathUnresolvable, ServerError
from mediafs.models.attributes import declare_attributes, declare_collections
from mediafs.models.registry import asset_types
from mediafs.schemas.wire import REPRESENTATION_KEY, TYPE_TAG_KEY
from mediafs.services import codec
from mediafs.transport import get_transport
from mediafs.util.paths import format_representation, parse_representation

logger = logging.getLogger(__name__)

_UNRESOLVED = object()


class Asset:
    """
    Base class for server-side objects.

    `Asset` itself has no path rule and is never addressable; subclasses
    must override `resolve_path`.

    Args:
        parameters (Mapping, optional): Attribute values keyed by wire key or
            accessor name. `__CLASS__` is dropped and `__REPRESENTATION__`
            fixes the instance's path. Keys with no declared accessor are
            ignored.
        **attributes: Same as `parameters`, merged on top of it.
    """

    type_tag = "MFS::Asset"
    api_attributes: Tuple[str, ...] = ()
    api_collections: Tuple[str, ...] = ()

    def __init_subclass__(cls, type_tag: Optional[str] = None, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.type_tag = type_tag or cls.__dict__.get("type_tag") or f"MFS::{cls.__name__}"
        previous = asset_types.get(cls.type_tag)
        asset_types.register(cls, cls.type_tag)
        try:
            declare_attributes(cls, *cls.__dict__.get("api_attributes", ()))
            declare_collections(cls, *cls.__dict__.get("api_collections", ()))
        except DeclarationError:
            asset_types.unregister(cls, previous)
            raise

    def __init__(self, parameters: Optional[Mapping] = None, **attributes):
        self._values = {}
        self._path = _UNRESOLVED

        params = dict(parameters or {})
        params.update(attributes)
        params.pop(TYPE_TAG_KEY, None)

        representation = params.pop(REPRESENTATION_KEY, None)
        if representation:
            self._path = parse_representation(representation)

        for key, value in params.items():
            descriptor = asset_types.descriptor_for(type(self), key)
            if descriptor is not None:
                descriptor.__set__(self, value)

    @classmethod
    def from_wire(cls, payload: Mapping) -> "Asset":
        return cls(payload)

    def to_wire(self) -> dict:
        return codec.encode(self)

    def to_json(self) -> str:
        return codec.dumps(self)

    def wire_values(self) -> dict:
        """Live mapping of wire key -> `Inline` / `Stub` slot."""
        return self._values

    def __repr__(self):
        # reading the cache only, so repr never fixes the path
        if self._path is _UNRESOLVED:
            where = "(path not resolved yet)"
        elif self._path is None:
            where = "(no path)"
        else:
            where = format_representation(self._path)
        return f"<{type(self).__name__} {where}>"

    # --------------------------------------------------------------------------
    # Paths
    # --------------------------------------------------------------------------

    @classmethod
    def resolve_path(cls, instance: Optional["Asset"] = None) -> Optional[Sequence]:
        """
        Path rule of the type.

        Args:
            instance (Asset, optional): When None, return the collection root
                of the type. Otherwise return the path of `instance`, or None
                if its attributes are not enough to build one.

        Raises:
            NotImplementedError: Always, on `Asset` itself.
        """
        raise NotImplementedError(f"{cls.__name__} needs to override Asset.resolve_path")

    @classmethod
    def collection_path(cls) -> Tuple[str, ...]:
        components = cls.resolve_path(None)
        if components is None:
            raise PathUnresolvable(f"{cls.__name__} has no collection path")
        return tuple(str(c) for c in components)

    def path_components(self, *extra) -> Optional[Tuple[str, ...]]:
        """
        Returns the path of this asset, with `extra` segments appended.

        The path is derived once and cached, even when it could not be
        derived, so later attribute changes do not move the asset. Extra
        segments never modify the cached value; None extras are skipped.

        Returns:
            Optional[Tuple[str, ...]]: The path, or None if it cannot be derived.
        """

        if self._path is _UNRESOLVED:
            components = type(self).resolve_path(self)
            # segments normalised to str
            self._path = tuple(str(c) for c in components) if components is not None else None

        if self._path is None:
            return None
        extra = tuple(str(e) for e in extra if e is not None)
        return self._path + extra if extra else self._path

    def _require_path(self, *extra) -> Tuple[str, ...]:
        path = self.path_components(*extra)
        if path is None:
            raise PathUnresolvable(
                f"Insufficient attributes were defined on {type(self).__name__} to generate a URL"
            )
        return path

    # --------------------------------------------------------------------------
    # Identity
    # --------------------------------------------------------------------------

    def __eq__(self, other):
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        path = self.path_components()
        return path is not None and path == other.path_components()

    def __hash__(self):
        return hash(self.path_components())

    # --------------------------------------------------------------------------
    # Network verbs
    # --------------------------------------------------------------------------

    def get(self, action: Optional[str] = None):
        return get_transport().get(self._require_path(action))

    def get_octet_stream(self, action: Optional[str] = None) -> bytes:
        return get_transport().get_octet_stream(self._require_path(action))

    def head(self, action: Optional[str] = None):
        return get_transport().head(self._require_path(action))

    def delete(self, action: Optional[str] = None):
        return get_transport().delete(self._require_path(action))

    def post(self, properties: Any, action: Optional[str] = None, headers: Optional[Mapping[str, str]] = None):
        return get_transport().post(self._require_path(action), properties, dict(headers or {}))

    def put(self, content_type: str, data: bytes):
        return get_transport().put(self._require_path(), content_type, data)

    def multipart_post(self, upload: Callable[[str], Mapping[str, Any]]):
        """
        Uploads through a caller-supplied routine.

        The target is this asset's path when it can be derived, otherwise the
        collection path of its type.

        Args:
            upload (Callable[[str], Mapping]): Receives the target URL and
                returns the multipart `files` mapping to send.
        """
        path = self.path_components() or type(self).collection_path()
        return get_transport().multipart_post(path, upload)

    def reload(self) -> "Asset":
        """
        Fetches a fresh copy of this asset from the server.

        Raises:
            PathUnresolvable: If this asset's path cannot be derived.
        """
        path = self.path_components()
        if path is None:
            raise PathUnresolvable("Insufficient attributes were defined to generate a URL in order to reload")
        return get_transport().get(path)

    def reload_in_place(self) -> "Asset":
        """Reloads and replaces this asset's whole state with the fresh copy."""
        return self._replace_with(self.reload())

    def _replace_with(self, asset: "Asset") -> "Asset":
        if not isinstance(asset, Asset):
            raise ServerError(f"Expected an asset from {format_representation(self._path)}, got {type(asset).__name__}")
        # single assignment: attributes and path change together
        self._values, self._path = dict(asset.wire_values()), asset.path_components()
        return self

    # --------------------------------------------------------------------------
    # Class-level lookups
    # --------------------------------------------------------------------------

    @classmethod
    def find(cls, parameters: Optional[Mapping] = None, **attributes):
        """
        Fetches the asset identified by the given attributes.

        Args:
            parameters (Mapping, optional): Enough attributes for
                `resolve_path` to build a path.

        Raises:
            PathUnresolvable: If no path can be built. No request is made.
        """
        stub = cls(parameters, **attributes)
        path = stub.path_components()
        if path is None:
            raise PathUnresolvable(f"Insufficient attributes were passed to {cls.__name__}.find to generate a URL")
        return get_transport().get(path)

    @classmethod
    def find_or_new(cls, parameters: Optional[Mapping] = None, **attributes):
        """Like `find`, but returns an unsaved instance when the server has none."""
        try:
            found = cls.find(parameters, **attributes)
        except NotFound:
            found = None
        return found or cls(parameters, **attributes)

    @classmethod
    def list(cls):
        return get_transport().get(cls.collection_path() + ("list",))


asset_types.register(Asset, Asset.type_tag)
