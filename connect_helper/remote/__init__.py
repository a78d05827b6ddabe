"""Remote management API transport."""

from .client import HttpRemoteClient, RemoteClient

__all__ = ["HttpRemoteClient", "RemoteClient"]
