"""
Connect helper: credential state, token refresh and a bounded error log for
a site's connection to a remote management service.
"""

from .host import HostEnvironment, StaticHostEnvironment, build_connect_config
from .remote import HttpRemoteClient, RemoteClient
from .services import CredentialManager, ErrorLog, TokenRefresher
from .storage import AtomicSettingsStore, InMemorySettingsStore, SettingsStore
from .utils.sanitizer import Sanitizer

__version__ = "1.0.0"

__all__ = [
    "AtomicSettingsStore",
    "CredentialManager",
    "ErrorLog",
    "HostEnvironment",
    "HttpRemoteClient",
    "InMemorySettingsStore",
    "RemoteClient",
    "Sanitizer",
    "SettingsStore",
    "StaticHostEnvironment",
    "TokenRefresher",
    "build_connect_config",
]
