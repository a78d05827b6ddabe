"""
Shared fixtures for connect helper unit tests.

This module provides an in-memory settings store, a fixed clock, a scripted
remote client and the services wired on top of them. Every test gets fresh
instances so no state leaks between tests.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

import pytest

from connect_helper.config import reset_config
from connect_helper.exceptions import clear_correlation_id
from connect_helper.remote.client import RemoteClient
from connect_helper.services.credential_manager import CredentialManager
from connect_helper.services.error_log import ErrorLog
from connect_helper.services.token_refresher import TokenRefresher
from connect_helper.storage.settings_store import InMemorySettingsStore
from connect_helper.utils.logger import reset_logging

FIXED_NOW = datetime(2024, 5, 17, 9, 30, 15)


class FakeRemoteClient(RemoteClient):
    """Remote client that replays queued responses and records every call."""

    def __init__(self, responses: Optional[List[Any]] = None):
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []

    def queue(self, response: Any) -> None:
        self.responses.append(response)

    def call(self, path, query=None, body=None, method="POST"):
        self.calls.append({"path": path, "query": query, "body": body, "method": method})
        response = self.responses.pop(0) if self.responses else {"success": False}
        if isinstance(response, Exception):
            raise response
        return response


class Clock:
    """Settable clock for timestamp assertions."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture(autouse=True)
def isolated_globals():
    """Reset process-wide config, logger and correlation ID around each test."""
    reset_config()
    reset_logging()
    clear_correlation_id()
    yield
    reset_config()
    reset_logging()
    clear_correlation_id()


@pytest.fixture
def store() -> InMemorySettingsStore:
    """Empty in-memory settings store."""
    return InMemorySettingsStore()


@pytest.fixture
def clock() -> Clock:
    """Clock fixed at FIXED_NOW until a test moves it."""
    return Clock()


@pytest.fixture
def credential_manager(store, clock) -> CredentialManager:
    """Credential manager on the in-memory store."""
    return CredentialManager(store, clock=clock)


@pytest.fixture
def error_log(store, clock) -> ErrorLog:
    """Error log on the in-memory store."""
    return ErrorLog(store, clock=clock)


@pytest.fixture
def remote_client() -> FakeRemoteClient:
    """Scripted remote client with no queued responses."""
    return FakeRemoteClient()


@pytest.fixture
def token_refresher(credential_manager, remote_client, error_log) -> TokenRefresher:
    """Token refresher wired to the fake remote client."""
    return TokenRefresher(credential_manager, remote_client, error_log)
