"""
Pydantic schemas describing this install to the remote management API.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class ConnectConfig(BaseModel):
    """Identity payload sent when registering the site with the remote service."""

    model_config = ConfigDict(extra="allow")

    url: str = Field(default="", description="Site URL")
    platform_version: str = Field(default="", description="Host platform version")
    runtime_version: str = Field(default="", description="Language runtime version")
    title: str = Field(default="", description="Site title")
    icon: str = Field(default="", description="Site icon URL")
    username: str = Field(default="", description="Base64 encoded admin username")
    managed: bool = Field(default=True, description="Whether the install is managed")

    def to_payload(self) -> Dict[str, Any]:
        """Return the payload as a plain dictionary, extra keys included."""
        return self.model_dump()


class ConnectPlan(BaseModel):
    """Active plan and the first time it was seen on this install."""

    plan_id: str
    plan_timestamp: str = ""
