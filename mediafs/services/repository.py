"""
Repository service.

`Repository` is a base class for code that prefers an explicit client
object over the process-wide transport. Subclasses name the model class
they build and the path rule of the resources they manage; lookups then go
through the client passed to the constructor.
"""

import logging
from typing import Mapping, Optional, Sequence

from mediafs.core.errors import NotFound, PathUnresolvable
from mediafs.transport import Transport

logger = logging.getLogger(__name__)


class Repository:
    """
    Helpful base class for talking to the media file server through a client.

    Example:
        >>> class EncodingRepository(Repository):
        ...     model_class = Encoding
        ...
        ...     def path_components(self, instance=None):
        ...         return Encoding.resolve_path(instance)
        >>> repo = EncodingRepository(MediaFileServer.from_env())
        >>> mp3 = repo.find(Name="mp3")
    """

    model_class: Optional[type] = None
    """Class (or factory) returning a new blank model instance."""

    def __init__(self, client: Transport):
        self._client = client

    def _model(self):
        if self.model_class is None:
            raise NotImplementedError(f"{type(self).__name__} must define model_class")
        return self.model_class

    def path_components(self, instance=None) -> Optional[Sequence]:
        """
        Path of the resource type, or of `instance` when one is given.

        ``("release", "track")`` stands for ``/release/track``.
        """
        raise NotImplementedError(f"{type(self).__name__} must override path_components")

    def find(self, parameters: Optional[Mapping] = None, **attributes):
        """
        Fetches an asset from the server.

        Args:
            parameters (Mapping, optional): Attributes identifying the asset,
                as required by the model's path rule.

        Raises:
            PathUnresolvable: If the attributes do not yield a path. No
                request is made.
        """
        stub = self._model()(parameters, **attributes)
        path = stub.path_components()
        if path is None:
            raise PathUnresolvable(f"Insufficient attributes were passed to {type(self).__name__}.find to generate a URL")

        logger.debug("Repository fetch %s", "/".join(path))
        return self._client.get(path)

    def find_or_new(self, parameters: Optional[Mapping] = None, **attributes):
        try:
            found = self.find(parameters, **attributes)
        except NotFound:
            found = None
        return found or self._model()(parameters, **attributes)

    def reload(self, instance):
        """
        Re-fetches `instance` at the path this repository derives for it.

        Raises:
            PathUnresolvable: If no path can be derived for `instance`.
        """
        path = self.path_components(instance)
        if path is None:
            raise PathUnresolvable(f"Cannot derive a path to reload {instance!r}")
        return self._client.get(tuple(str(c) for c in path))
