"""
Exchange the stored connect ID for a fresh JWT.

The JWT carries no expiry on this side; callers find out it is stale when
the remote API rejects it and then call `TokenRefresher.refresh`. Each call
is a single blocking attempt with no retry.
"""

from typing import Any, Mapping, Optional

import pydantic

from ..constants import GENERATE_TOKEN_PATH
from ..exceptions import RemoteCallError
from ..remote.client import RemoteClient
from ..schemas.remote_schemas import GeneratedToken, RemoteResponse
from ..utils.logger import get_logger
from .credential_manager import CredentialManager
from .error_log import ErrorLog

TOKEN_REFRESH_ERROR_MESSAGE = "generate-token failed, response from generate-token api"


def extract_token(response: Any) -> Optional[str]:
    """Return the token from a successful generate-token envelope, else None."""
    if not isinstance(response, Mapping):
        return None

    try:
        envelope = RemoteResponse.model_validate(dict(response))
        if not envelope.success:
            return None
        return GeneratedToken.model_validate(envelope.data).token or None
    except pydantic.ValidationError:
        # Envelopes that do not fit the schema (e.g. non-string keys) carry no usable token
        return None


class TokenRefresher:
    """Refreshes the stored JWT through the remote generate-token endpoint."""

    def __init__(
        self,
        credentials: CredentialManager,
        remote: RemoteClient,
        error_log: ErrorLog,
    ):
        self.credentials = credentials
        self.remote = remote
        self.error_log = error_log
        self.logger = get_logger()

    def refresh(self, connect_id: Optional[int] = None) -> bool:
        """
        Request a new JWT and store it.

        Args:
            connect_id: Connect ID to refresh for (default: the stored one)

        Returns:
            True when a token was received and stored. False when no connect
            ID is known (no remote call is made) or the call failed; failures
            are recorded in the error log.
        """
        connect_id = connect_id or self.credentials.get_connect_id()
        if not connect_id:
            self.logger.debug("Token refresh skipped, no connect ID available")
            return False

        path = GENERATE_TOKEN_PATH.format(connect_id=connect_id)
        response: Any = None
        cause: Optional[RemoteCallError] = None

        try:
            response = self.remote.call(path, {}, {}, "GET")
        except RemoteCallError as e:
            cause = e
        else:
            token = extract_token(response)
            if token:
                if not self.credentials.set_jwt(token):
                    self.logger.warning(
                        "Refreshed token could not be persisted", extra={"connect_id": connect_id}
                    )
                self.logger.info("Token refreshed", extra={"connect_id": connect_id})
                return True

        self.error_log.append(
            {
                "message": TOKEN_REFRESH_ERROR_MESSAGE,
                "response": response,
                "connect_id": connect_id,
            },
            cause,
        )
        self.logger.warning(
            "Token refresh failed",
            extra={"connect_id": connect_id, "transport_error": cause is not None},
        )
        return False
