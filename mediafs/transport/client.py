"""
HTTP transport.

`MediaFileServer` implements the transport operations on top of `httpx`.
Responses are decoded with the wire codec, so callers get assets back rather
than raw JSON. Failures are translated into the package's error taxonomy:

    - an error payload in the body raises the `ServerError` subclass it names,
    - otherwise the HTTP status picks the class (404 -> `NotFound`, ...),
    - connection problems raise `TransportError`.

Successful bodies that are not JSON are handed back as text.
"""

import json
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

import httpx

from mediafs.core.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, Settings, load_settings
from mediafs.core.errors import (
    BadParameters,
    Conflict,
    NotFound,
    NotImplementedOnServer,
    PermissionDenied,
    ServerError,
    TransportError,
    error_for_kind,
)
from mediafs.schemas.wire import TYPE_TAG_KEY
from mediafs.services import codec
from mediafs.util.paths import build_url

logger = logging.getLogger(__name__)

STATUS_ERRORS = {
    400: BadParameters,
    401: PermissionDenied,
    403: PermissionDenied,
    404: NotFound,
    409: Conflict,
    501: NotImplementedOnServer,
}


class MediaFileServer:
    """
    Synchronous client for the media file server API.

    Typical usage::

        with MediaFileServer.from_env() as server:
            init_transport(server)
            encodings = Encoding.list()

    Args:
        base_url (str): Server root URL.
        auth: Anything `httpx` accepts as auth, usually a (user, password) tuple.
        timeout (float): Request timeout in seconds.
        transport (httpx.BaseTransport, optional): Lower-level httpx
            transport, e.g. `httpx.MockTransport` in tests.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        auth=None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self._client = httpx.Client(auth=auth, timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "MediaFileServer":
        return cls(settings.base_url, auth=settings.auth, timeout=settings.timeout, **kwargs)

    @classmethod
    def from_env(cls, **kwargs) -> "MediaFileServer":
        return cls.from_settings(load_settings(), **kwargs)

    def __repr__(self):
        return f"<MediaFileServer {self.base_url}>"

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self) -> None:
        self._client.close()

    def url_for(self, path: Sequence[str]) -> str:
        return build_url(self.base_url, path)

    # ---------------------------------------------------------------------
    # Transport operations
    # ---------------------------------------------------------------------

    def get(self, path: Sequence[str]) -> Any:
        return self._decode(self._request("GET", path))

    def get_octet_stream(self, path: Sequence[str]) -> bytes:
        return self._request("GET", path, headers={"Accept": "application/octet-stream"}).content

    def head(self, path: Sequence[str]) -> Optional[httpx.Headers]:
        """Returns the response headers, or None when the resource does not exist."""
        try:
            return self._request("HEAD", path).headers
        except NotFound:
            return None

    def delete(self, path: Sequence[str]) -> None:
        self._request("DELETE", path)

    def post(self, path: Sequence[str], body: Any, headers: Optional[Mapping[str, str]] = None) -> Any:
        request_headers: Dict[str, str] = {"Content-Type": "application/json"}
        request_headers.update(headers or {})
        response = self._request("POST", path, content=codec.dumps(body), headers=request_headers)
        return self._decode(response)

    def put(self, path: Sequence[str], content_type: str, data: bytes) -> Any:
        response = self._request("PUT", path, content=data, headers={"Content-Type": content_type})
        return self._decode(response)

    def multipart_post(self, path: Sequence[str], upload: Callable[[str], Mapping[str, Any]]) -> Any:
        """
        Posts multipart data produced by `upload`.

        Args:
            path (Sequence[str]): Target path.
            upload (Callable[[str], Mapping]): Called with the target URL,
                returns the `files` mapping handed to httpx.
        """
        files = upload(self.url_for(path))
        return self._decode(self._request("POST", path, files=files))

    # ---------------------------------------------------------------------
    # Internals
    # ---------------------------------------------------------------------

    def _request(self, method: str, path: Sequence[str], **kwargs) -> httpx.Response:
        url = self.url_for(path)
        logger.debug("%s %s", method, url)

        try:
            response = self._client.request(method, url, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            raise self._error_for(e.response) from e
        except httpx.RequestError as e:
            raise TransportError(f"Connection error to media file server: {e}") from e

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """
        Decodes a successful response body.

        JSON bodies go through the wire codec. Other bodies (a plain "OK"
        after an upload, say) are returned as text.

        Raises:
            ServerError: If the body is declared as JSON but cannot be parsed.
        """
        if not response.content:
            return None

        declared_json = "json" in response.headers.get("content-type", "")
        try:
            return codec.loads(response.content)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            if declared_json:
                raise ServerError(f"Undecodable JSON body from {response.request.url}: {e}") from e
            return response.text

    @staticmethod
    def _error_for(response: httpx.Response) -> ServerError:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict) and isinstance(payload.get(TYPE_TAG_KEY), str):
            if error_for_kind(payload[TYPE_TAG_KEY]) is not None:
                try:
                    codec.decode(payload)
                except ServerError as error:
                    return error

        error_class = STATUS_ERRORS.get(response.status_code, ServerError)
        return error_class(f"HTTP {response.status_code} from media file server: {response.text}")
