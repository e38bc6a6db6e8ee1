"""
Wire codec.

This module converts assets to and from the JSON payloads exchanged with
the media file server.

Encoding tags the payload with the concrete type (`__CLASS__`) and writes
every stored attribute. The server has no native boolean, so `True` and
`False` attribute values are sent as 1 and 0. Decoding does not undo this:
a boolean attribute read back from the server holds 1 or 0.

Decoding strips the type tag and the optional `__REPRESENTATION__` field,
looks the concrete type up in the type registry and lets the type apply the
remaining keys through its declared accessors. Keys with no accessor are
ignored so that newer servers can add fields. Error payloads are raised as
the matching `ServerError` subclass instead of being decoded.
"""

import json
import logging
from typing import Any, Mapping

from mediafs.core.errors import UnknownTypeTag, error_for_kind
from mediafs.models.registry import asset_types
from mediafs.models.values import Inline, Stub
from mediafs.schemas.wire import TYPE_TAG_KEY, ErrorPayload

logger = logging.getLogger(__name__)


def is_asset(value: Any) -> bool:
    return hasattr(value, "wire_values") and hasattr(type(value), "type_tag")


def encode(asset) -> dict:
    """
    Encodes an asset into a wire payload.

    Args:
        asset (Asset): The asset to encode.

    Returns:
        dict: ``{"__CLASS__": <type tag>, <wire key>: <value>, ...}`` with
        booleans written as 1/0 and unresolved stubs written back as
        representation objects.
    """

    result = {TYPE_TAG_KEY: type(asset).type_tag}
    for key, slot in asset.wire_values().items():
        value = slot.to_wire() if isinstance(slot, Stub) else slot.value
        if value is True:
            value = 1
        elif value is False:
            value = 0
        result[key] = encode_value(value)
    return result


def encode_value(value: Any) -> Any:
    """Encodes nested assets found inside an arbitrary JSON-compatible value."""
    if is_asset(value):
        return encode(value)
    if isinstance(value, Stub):
        return value.to_wire()
    if isinstance(value, Inline):
        return encode_value(value.value)
    if isinstance(value, Mapping):
        return {k: encode_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [encode_value(v) for v in value]
    return value


def decode(payload: Mapping):
    """
    Builds the asset described by a wire payload.

    Args:
        payload (Mapping): A decoded JSON object carrying a `__CLASS__` field.

    Returns:
        Asset: An instance of the type registered for the payload's tag.

    Raises:
        ServerError: (or a subclass) If the payload is a server error object.
        UnknownTypeTag: If the tag is missing or no type is registered for it.
    """

    tag = payload.get(TYPE_TAG_KEY)
    if not isinstance(tag, str):
        raise UnknownTypeTag(tag)

    error_class = error_for_kind(tag)
    if error_class is not None:
        error = ErrorPayload.model_validate(payload)
        logger.debug("Server signalled %s: %s", error.kind, error.errormessage)
        raise error_class(error.errormessage or "")

    asset_type = asset_types.lookup(tag)
    return asset_type.from_wire(payload)


def object_hook(obj: dict) -> Any:
    """`json.loads` hook: tagged objects become assets, the rest stay plain dicts."""
    if TYPE_TAG_KEY in obj:
        return decode(obj)
    return obj


def loads(text) -> Any:
    """Decodes a JSON document, turning every tagged object into an asset."""
    return json.loads(text, object_hook=object_hook)


def dumps(value: Any) -> str:
    return json.dumps(encode_value(value))
