"""
Endpoint configuration for the pRuntime console.
"""
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PRUNTIME_ENDPOINT = "http://localhost:8000"
DEFAULT_SUBSTRATE_WS_ENDPOINT = "ws://localhost:9944"
DEFAULT_SS58_FORMAT = 30


class EndpointConfig(BaseModel):
    """Immutable endpoint settings, built once per process"""
    model_config = ConfigDict(frozen=True)

    pruntime_endpoint: str = DEFAULT_PRUNTIME_ENDPOINT
    substrate_ws_endpoint: str = DEFAULT_SUBSTRATE_WS_ENDPOINT
    json_output: bool = False
    ss58_format: int = Field(DEFAULT_SS58_FORMAT, ge=0)

    @field_validator("pruntime_endpoint")
    @classmethod
    def validate_pruntime_endpoint(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("pruntime_endpoint must use http:// or https://")
        return value.rstrip("/")

    @field_validator("substrate_ws_endpoint")
    @classmethod
    def validate_substrate_ws_endpoint(cls, value: str) -> str:
        if not value.startswith(("ws://", "wss://")):
            raise ValueError("substrate_ws_endpoint must use ws:// or wss://")
        return value

    @classmethod
    def from_env(cls, json_output: bool = False, environ: Optional[dict] = None) -> "EndpointConfig":
        """
        Build the configuration from ``PRUNTIME_ENDPOINT`` and ``ENDPOINT``.

        Args:
            json_output: Whether results are printed as plain JSON
            environ: Mapping to read instead of ``os.environ``
        """
        env = os.environ if environ is None else environ
        return cls(
            pruntime_endpoint=env.get("PRUNTIME_ENDPOINT", DEFAULT_PRUNTIME_ENDPOINT),
            substrate_ws_endpoint=env.get("ENDPOINT", DEFAULT_SUBSTRATE_WS_ENDPOINT),
            json_output=json_output,
        )
