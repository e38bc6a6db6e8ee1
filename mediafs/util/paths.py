"""
Path helpers.

Utility functions to convert between the three shapes a resource address
takes on its way to and from the media file server:

    - path components, e.g. ``("encoding", "mp3")``
    - representation strings, e.g. ``"/encoding/mp3"``
    - fully qualified URLs, e.g. ``"http://mfs.example.com/encoding/mp3"``
"""

from typing import Iterable, Tuple
from urllib.parse import quote


def parse_representation(representation: str) -> Tuple[str, ...]:
    """
    Splits a representation string into path components.

    A single leading slash is dropped before splitting.

    Args:
        representation (str): A wire path such as ``"/filestore/42"``.

    Returns:
        Tuple[str, ...]: The path components, e.g. ``("filestore", "42")``.
    """

    if representation.startswith("/"):
        representation = representation[1:]
    return tuple(representation.split("/"))


def format_representation(components: Iterable) -> str:
    """Inverse of `parse_representation`."""
    return "/" + "/".join(str(c) for c in components)


def build_url(base_url: str, components: Iterable) -> str:
    """
    Builds the URL of a resource from the server root and its path components.

    Each component is URL-quoted on its own, so a component may contain
    a slash without creating an extra path level.

    Args:
        base_url (str): Server root, with or without a trailing slash.
        components (Iterable): Path components.

    Returns:
        str: Fully qualified URL.
    """

    path = "/".join(quote(str(c), safe="") for c in components)
    return f"{base_url.rstrip('/')}/{path}"
