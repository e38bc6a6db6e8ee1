"""
mediafs: client-side models for the media file server API.

Importing the package registers the built-in asset types so that payloads
tagged with them can be decoded.
"""

from importlib.metadata import PackageNotFoundError, version

from mediafs.core.errors import (
    BadParameters,
    Conflict,
    MediaFileServerException,
    NotFound,
    NotImplementedOnServer,
    PathUnresolvable,
    PermissionDenied,
    ServerError,
    TransportError,
    UnknownTypeTag,
    UsageError,
)
from mediafs.models.asset import Asset
from mediafs.models.attributes import declare_attributes, declare_collections
from mediafs.models.metadata import ContextualMethod, Encoding
from mediafs.transport import get_transport, init_transport, reset_transport
from mediafs.transport.client import MediaFileServer
from mediafs.util.logging import configure_logging

try:
    __version__ = version("mediafs-client")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "Asset",
    "BadParameters",
    "Conflict",
    "ContextualMethod",
    "Encoding",
    "MediaFileServer",
    "MediaFileServerException",
    "NotFound",
    "NotImplementedOnServer",
    "PathUnresolvable",
    "PermissionDenied",
    "ServerError",
    "TransportError",
    "UnknownTypeTag",
    "UsageError",
    "configure_logging",
    "declare_attributes",
    "declare_collections",
    "get_transport",
    "init_transport",
    "reset_transport",
    "__version__",
]
