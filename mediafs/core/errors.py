"""
Error taxonomy.

This module defines every exception raised by the media file server client.
Errors are split into three branches so that callers can tell apart:

    - `ServerError` and its subclasses: failures signalled by the remote
      API, either through an error payload or an HTTP status.
    - `UsageError` and its subclasses: local misuse, such as asking for a
      resource without enough attributes to build its path, decoding an
      unregistered type tag, or declaring a reserved attribute key.
    - `TransportError`: the request never produced a response.

All of them derive from `MediaFileServerException`.
"""

from typing import Dict, Optional, Type


class MediaFileServerException(Exception):
    """Root of every exception raised by this package."""


# ------------------------------------------------------------------------------
# Remote-signalled errors
# ------------------------------------------------------------------------------

class ServerError(MediaFileServerException):
    """
    Generic error reported by the media file server.

    Attributes:
        message (str): Text sent by the server in the `errormessage` field.
        kind (str): Wire name of the error kind (`Error`, `NotFound`, ...).
    """

    kind = "Error"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class PermissionDenied(ServerError):
    kind = "PermissionDenied"


class NotImplementedOnServer(ServerError):
    kind = "NotImplemented"


class Conflict(ServerError):
    kind = "Conflict"


class BadParameters(ServerError):
    kind = "BadParameters"


class NotFound(ServerError):
    kind = "NotFound"


ERROR_KINDS: Dict[str, Type[ServerError]] = {
    cls.kind: cls
    for cls in (ServerError, PermissionDenied, NotImplementedOnServer, Conflict, BadParameters, NotFound)
}
"""Wire error kind -> exception class."""


def error_for_kind(kind: str) -> Optional[Type[ServerError]]:
    """
    Returns the exception class for a wire error kind.

    Both the bare form (`NotFound`) and the namespaced forms
    (`MFS::Error`, `MFS::Error::NotFound`) are accepted.

    Args:
        kind (str): The value of the payload's type-tag field.

    Returns:
        Optional[Type[ServerError]]: The matching class, or None if `kind`
        does not name an error.
    """

    if kind in ERROR_KINDS:
        return ERROR_KINDS[kind]
    if kind == "MFS::Error":
        return ServerError
    prefix = "MFS::Error::"
    if kind.startswith(prefix):
        return ERROR_KINDS.get(kind[len(prefix):])
    return None


# ------------------------------------------------------------------------------
# Local usage errors
# ------------------------------------------------------------------------------

class UsageError(MediaFileServerException):
    """The client was used in a way that cannot succeed, no request was made."""


class PathUnresolvable(UsageError):
    """Not enough attributes were supplied to derive a resource path."""


class UnknownTypeTag(UsageError):
    """A payload names a type that has no registered factory."""

    def __init__(self, tag):
        super().__init__(f"No asset type is registered for type tag {tag!r}")
        self.tag = tag


class DeclarationError(UsageError):
    """An asset type declared an attribute that cannot be wired."""


class TransportNotConfigured(UsageError):
    """No transport was installed with `init_transport()`."""


# ------------------------------------------------------------------------------
# Transport failures
# ------------------------------------------------------------------------------

class TransportError(MediaFileServerException):
    """The request could not be delivered (DNS, connection refused, timeout...)."""
