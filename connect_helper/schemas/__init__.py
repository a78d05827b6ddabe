"""Pydantic schemas for the connect helper."""

from .connect_schemas import ConnectConfig, ConnectPlan
from .remote_schemas import GeneratedToken, RemoteResponse

__all__ = [
    "ConnectConfig",
    "ConnectPlan",
    "GeneratedToken",
    "RemoteResponse",
]
