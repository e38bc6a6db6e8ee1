"""
Metadata asset types.

Concrete assets describing server-side metadata: audio encodings and the
contextual methods callable on server objects.
"""

import copy
import logging

from mediafs.models.asset import Asset
from mediafs.models.registry import asset_types
from mediafs.transport import get_transport

logger = logging.getLogger(__name__)


class Encoding(Asset, type_tag="MFS::Metadata::Encoding"):
    """
    Audio codec associated with a server-side audio file.

    Encodings live at ``/encoding/<Name>``. The full list is cached
    process-wide by `synchronize()` and read back with `encodings()`.

    Example:
        >>> mp3 = Encoding.find(Name="mp3")
        >>> print(mp3.codec, mp3.bitrate)
        mp3 128
    """

    api_attributes = ("Name", "Codec", "Family", "PreviewLength", "Channels", "Bitrate", "Description")

    @classmethod
    def resolve_path(cls, instance=None):
        if instance is None:
            return ["encoding"]
        if instance.name:
            return ["encoding", instance.name]
        return None

    @classmethod
    def synchronize(cls):
        """
        Fetches every encoding from the server and caches the result.

        Returns:
            The fetched listing.
        """
        listing = get_transport().get(cls.collection_path())
        asset_types.record(cls).listing = listing
        logger.debug("Synchronised %d encodings", len(listing or ()))
        return listing

    @classmethod
    def encodings(cls):
        """Copy of the cached listing, or None if `synchronize()` was never called."""
        listing = asset_types.record(cls).listing
        return copy.copy(listing) if listing is not None else None


class ContextualMethod(Asset, type_tag="MFS::ContextualMethod"):
    """
    A method call available on a server-side object.

    Contextual methods only reach the client nested inside other payloads
    and have no address of their own.
    """

    @classmethod
    def resolve_path(cls, instance=None):
        return None
