"""
Host environment queries and the connect identity payload.

The connect helper never looks up site details itself. The embedding
application supplies a `HostEnvironment`, and `build_connect_config` turns
its answers into the payload sent when registering with the remote service.
"""

import base64
import platform
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from .exceptions import validation_failed
from .schemas.connect_schemas import ConnectConfig


class HostEnvironment(ABC):
    """Read-only view of the host application."""

    @abstractmethod
    def site_url(self) -> str:
        """Canonical site URL."""

    @abstractmethod
    def platform_version(self) -> str:
        """Version of the host platform."""

    def runtime_version(self) -> str:
        """Version of the language runtime."""
        return platform.python_version()

    @abstractmethod
    def site_title(self) -> str:
        """Human readable site name."""

    def site_icon_url(self) -> str:
        """URL of the site icon, empty if none."""
        return ""

    @abstractmethod
    def admin_username(self) -> str:
        """Login name of the current or first administrator, empty if none."""


@dataclass
class StaticHostEnvironment(HostEnvironment):
    """HostEnvironment backed by fixed values."""

    url: str = ""
    version: str = ""
    title: str = ""
    icon_url: str = ""
    admins: list = field(default_factory=list)
    current_user: Optional[str] = None

    def site_url(self) -> str:
        return self.url

    def platform_version(self) -> str:
        return self.version

    def site_title(self) -> str:
        return self.title

    def site_icon_url(self) -> str:
        return self.icon_url

    def admin_username(self) -> str:
        # The current user wins when they are an administrator
        if self.current_user and self.current_user in self.admins:
            return self.current_user
        return self.admins[0] if self.admins else ""


def encode_username(username: str) -> str:
    """Base64 encode a username for transport."""
    return base64.b64encode(username.encode("utf-8")).decode("ascii")


def build_connect_config(
    host: HostEnvironment,
    config: Union[bool, Mapping[str, Any], None] = None,
) -> Dict[str, Any]:
    """
    Build the identity payload describing this install.

    Args:
        host: Host environment to query
        config: ``True``/``False`` sets the managed flag; a mapping is merged
            over the defaults (managed stays ``True`` unless it overrides it)

    Returns:
        Payload dictionary

    Raises:
        ValidationError: If config is neither a bool, a mapping nor None
    """
    if config is not None and not isinstance(config, (bool, Mapping)):
        raise validation_failed("config", config, "must be a bool or a mapping")

    payload = ConnectConfig(
        url=host.site_url(),
        platform_version=host.platform_version(),
        runtime_version=host.runtime_version(),
        title=host.site_title(),
        icon=host.site_icon_url(),
        username=encode_username(host.admin_username()),
        managed=config if isinstance(config, bool) else True,
    ).to_payload()

    if isinstance(config, Mapping):
        payload.update(config)

    return payload
