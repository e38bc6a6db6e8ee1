"""
Shared pytest fixtures.
"""

import json
import logging

import pytest

from mediafs.models.metadata import Encoding
from mediafs.models.registry import asset_types
from mediafs.services import codec
from mediafs.transport import init_transport, reset_transport
from mediafs.util.logging import configure_logging

configure_logging(logging.DEBUG)


class FakeTransport:
    """
    Records every call and answers GETs from canned payloads.

    Payloads go through a JSON round trip and the codec on each request,
    like the HTTP transport would decode them. A canned exception is raised
    instead of returned.
    """

    def __init__(self):
        self.responses = {}
        self.calls = []

    def respond(self, path, payload):
        self.responses[tuple(path)] = payload

    def _answer(self, path):
        payload = self.responses.get(tuple(path))
        if isinstance(payload, Exception):
            raise payload
        if payload is None:
            return None
        return codec.loads(json.dumps(payload))

    def get(self, path):
        self.calls.append(("get", tuple(path)))
        return self._answer(path)

    def get_octet_stream(self, path):
        self.calls.append(("get_octet_stream", tuple(path)))
        return b"\x00\x01"

    def head(self, path):
        self.calls.append(("head", tuple(path)))
        return {"Content-Length": "2"}

    def delete(self, path):
        self.calls.append(("delete", tuple(path)))

    def post(self, path, body, headers=None):
        self.calls.append(("post", tuple(path), body, headers))
        return self._answer(path)

    def put(self, path, content_type, data):
        self.calls.append(("put", tuple(path), content_type, data))
        return self._answer(path)

    def multipart_post(self, path, upload):
        files = upload("/" + "/".join(path))
        self.calls.append(("multipart_post", tuple(path), files))
        return self._answer(path)


@pytest.fixture(autouse=True)
def transport():
    """Install a fresh fake transport for every test."""
    fake = FakeTransport()
    init_transport(fake)
    try:
        yield fake
    finally:
        reset_transport()


@pytest.fixture(autouse=True)
def clear_encoding_listing():
    asset_types.record(Encoding).listing = None
    yield
    asset_types.record(Encoding).listing = None
