"""
Pydantic schemas for payloads exchanged with the remote management API.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RemoteResponse(BaseModel):
    """
    Envelope returned by every remote API call.

    The API is loosely typed: ``success`` may arrive as a bool, a number or
    a string, and ``data`` may be missing or not an object. Both are read by
    truthiness / shape so an odd envelope counts as unsuccessful instead of
    failing validation.
    """

    model_config = ConfigDict(extra="allow")

    success: bool = Field(default=False, description="Whether the call succeeded")
    data: Dict[str, Any] = Field(default_factory=dict, description="Response payload")

    @field_validator("success", mode="before")
    @classmethod
    def coerce_success(cls, v):
        """Treat any non-empty value as success, except the string "0"."""
        return bool(v) and v != "0"

    @field_validator("data", mode="before")
    @classmethod
    def coerce_data(cls, v):
        """Replace a non-object payload with an empty one."""
        return v if isinstance(v, dict) else {}


class GeneratedToken(BaseModel):
    """``data`` payload of the generate-token endpoint."""

    model_config = ConfigDict(extra="allow")

    token: Optional[str] = Field(default=None, description="Fresh JWT")

    @field_validator("token", mode="before")
    @classmethod
    def coerce_token(cls, v):
        """Only strings count as a token."""
        return v if isinstance(v, str) else None
