"""
Wire format schemas.

This module defines the reserved keys of the media file server's JSON
payloads and the Pydantic schema used to validate server error objects.

Payload shape:
    ``{"__CLASS__": "MFS::Metadata::Encoding", "__REPRESENTATION__": "/encoding/mp3", "Name": "mp3", ...}``

Error payload shape:
    ``{"__CLASS__": "NotFound", "errormessage": "No such encoding"}``
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

TYPE_TAG_KEY = "__CLASS__"
"""Field naming the concrete type of a payload."""

REPRESENTATION_KEY = "__REPRESENTATION__"
"""Field carrying the path of a resource, alone it forms a representation stub."""

RESERVED_KEYS = frozenset({TYPE_TAG_KEY, REPRESENTATION_KEY})


class ErrorPayload(BaseModel):
    """
    Represents an error object sent by the server in place of a resource.

    Example:
        >>> error = ErrorPayload.model_validate(
        ...     {"__CLASS__": "Conflict", "errormessage": "Name already taken"}
        ... )
        >>> print(error.kind, error.errormessage)
        Conflict Name already taken
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    kind: str = Field(alias=TYPE_TAG_KEY)
    """Error kind, e.g. `NotFound`."""

    errormessage: Optional[str] = None
    """Human-readable explanation supplied by the server."""
