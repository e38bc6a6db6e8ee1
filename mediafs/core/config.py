"""
Client configuration.

Settings are read from environment variables, optionally seeded from a
`.env` file in the working directory.

Environment variables:
    - MFS_BASE_URL:  Root URL of the media file server (default: http://localhost:8080)
    - MFS_USERNAME:  Account used for HTTP basic auth (optional)
    - MFS_PASSWORD:  Password for that account (optional)
    - MFS_TIMEOUT:   Request timeout in seconds (default: 30)

Usage example:
    >>> from mediafs.core.config import load_settings
    >>> settings = load_settings()
    >>> print(settings.base_url)
    http://localhost:8080
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_TIMEOUT = 30.0


class Settings(BaseModel):
    """
    Connection settings for a `MediaFileServer` client.

    Example:
        >>> settings = Settings(
        ...     base_url="https://mfs.example.com/api",
        ...     username="example@ci-support.com",
        ...     password="example"
        ... )
        >>> settings.auth
        ('example@ci-support.com', 'example')
    """

    base_url: str = DEFAULT_BASE_URL
    """Root URL every path is appended to."""

    username: Optional[str] = None
    """Basic-auth user name. Requests are anonymous when unset."""

    password: Optional[str] = None
    """Basic-auth password."""

    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    """Per-request timeout in seconds."""

    @property
    def auth(self):
        if not self.username:
            return None
        return (self.username, self.password or "")


def load_settings() -> Settings:
    """
    Builds `Settings` from the environment.

    Returns:
        Settings: Validated settings.

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value
        (e.g. a non-numeric `MFS_TIMEOUT`).
    """

    load_dotenv()

    return Settings(
        base_url=os.getenv("MFS_BASE_URL", DEFAULT_BASE_URL),
        username=os.getenv("MFS_USERNAME") or None,
        password=os.getenv("MFS_PASSWORD") or None,
        timeout=os.getenv("MFS_TIMEOUT", DEFAULT_TIMEOUT),
    )
