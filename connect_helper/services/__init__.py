"""Service layer for credential, token and error log management."""

from .credential_manager import CredentialManager
from .error_log import ErrorLog
from .token_refresher import TokenRefresher

__all__ = [
    "CredentialManager",
    "ErrorLog",
    "TokenRefresher",
]
