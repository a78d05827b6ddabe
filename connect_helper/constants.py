"""
Constants and enums for the connect helper.

This module centralizes the option names, record field names and limits
used throughout the package so storage layouts stay consistent.
"""

from enum import Enum


class OptionName(str, Enum):
    """Settings store keys owned by this package."""

    CREDENTIALS = "connect_api_options"
    ERROR_LOG = "connect_helper_error_log"


class CredentialField(str, Enum):
    """Field names inside the credential record."""

    API_KEY = "api_key"
    CONNECT_ID = "connect_id"
    CONNECT_UUID = "connect_uuid"
    ORIGIN = "origin"
    JWT = "jwt"
    PLAN_ID = "plan_id"
    GROUP_UUID = "group_uuid"
    RESPONSE = "response"
    API_URL = "api_url"


class LogLevel(str, Enum):
    """Standard logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EnvironmentVariable(str, Enum):
    """Standard environment variable names."""

    API_URL = "CONNECT_API_URL"
    API_TIMEOUT = "CONNECT_API_TIMEOUT"
    OPTIONS_NAME = "CONNECT_OPTIONS_NAME"
    ERROR_LOG_NAME = "CONNECT_ERROR_LOG_NAME"
    LOG_LEVEL = "LOG_LEVEL"


class RandomSource(str, Enum):
    """Entropy source used to build a random string."""

    URANDOM = "urandom"
    UUID4_SHA256 = "uuid4-sha256"


# Stored timestamps use the MySQL datetime layout
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Remote endpoint that exchanges a connect ID for a fresh JWT
GENERATE_TOKEN_PATH = "connects/{connect_id}/generate-token"


def plan_timestamp_key(plan_id: str) -> str:
    """Return the flat record key holding the first-seen time of a plan."""
    return f"plan_{plan_id}_timestamp"


class Limits:
    """System limits and thresholds."""

    ERROR_LOG_MAX_ENTRIES = 150
    ERROR_LOG_EVICT_COUNT = 50
    DEFAULT_RANDOM_LENGTH = 6


class Timeouts:
    """Timeout values in seconds."""

    EXTERNAL_API_CALL = 30
