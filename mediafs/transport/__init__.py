"""
Transport slot.

Assets never talk to the network themselves. They go through the transport
installed here, which must provide the methods of `Transport`. The HTTP
implementation is `mediafs.transport.client.MediaFileServer`; tests install a
recording fake.

Usage example:
    >>> from mediafs.transport import init_transport, get_transport
    >>> from mediafs.transport.client import MediaFileServer
    >>> init_transport(MediaFileServer.from_env())
    >>> get_transport().get(("encoding", "list"))
"""

import logging
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence

from mediafs.core.errors import TransportNotConfigured

logger = logging.getLogger(__name__)

PathComponents = Sequence[str]


class Transport(Protocol):
    """Operations every transport must provide. Payloads are already decoded."""

    def get(self, path: PathComponents) -> Any: ...

    def get_octet_stream(self, path: PathComponents) -> bytes: ...

    def head(self, path: PathComponents) -> Any: ...

    def delete(self, path: PathComponents) -> None: ...

    def post(self, path: PathComponents, body: Any, headers: Optional[Mapping[str, str]] = None) -> Any: ...

    def put(self, path: PathComponents, content_type: str, data: bytes) -> Any: ...

    def multipart_post(self, path: PathComponents, upload: Callable[[str], Mapping[str, Any]]) -> Any: ...


# Global transport reference
_transport: Optional[Transport] = None


def init_transport(transport: Transport) -> Transport:
    """
    Installs the transport used by every asset operation.

    Returns:
        Transport: The transport that was installed.
    """
    global _transport
    _transport = transport
    logger.debug("Transport installed: %r", transport)
    return transport


def reset_transport() -> None:
    global _transport
    _transport = None


def get_transport() -> Transport:
    """
    Retrieves the installed transport.

    Raises:
        TransportNotConfigured: If `init_transport()` has not been called yet.
    """

    if _transport is None:
        raise TransportNotConfigured("No transport installed. Call init_transport() first.")
    return _transport
