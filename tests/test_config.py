"""
Tests for the endpoint configuration.
"""
import pytest
from pydantic import ValidationError

from pruntime_sdk.config import (
    DEFAULT_PRUNTIME_ENDPOINT,
    DEFAULT_SS58_FORMAT,
    DEFAULT_SUBSTRATE_WS_ENDPOINT,
    EndpointConfig,
)


def test_defaults():
    config = EndpointConfig()
    assert config.pruntime_endpoint == DEFAULT_PRUNTIME_ENDPOINT
    assert config.substrate_ws_endpoint == DEFAULT_SUBSTRATE_WS_ENDPOINT
    assert config.json_output is False
    assert config.ss58_format == DEFAULT_SS58_FORMAT == 30


def test_from_env():
    config = EndpointConfig.from_env(
        json_output=True,
        environ={"PRUNTIME_ENDPOINT": "http://10.0.0.2:8000/", "ENDPOINT": "wss://khala.example.com"}
    )
    assert config.pruntime_endpoint == "http://10.0.0.2:8000"
    assert config.substrate_ws_endpoint == "wss://khala.example.com"
    assert config.json_output is True


def test_from_env_defaults():
    config = EndpointConfig.from_env(environ={})
    assert config == EndpointConfig()


def test_immutable():
    config = EndpointConfig()
    with pytest.raises(ValidationError):
        config.json_output = True


@pytest.mark.parametrize("field,value", [
    ("pruntime_endpoint", "ftp://localhost"),
    ("substrate_ws_endpoint", "http://localhost:9944"),
])
def test_invalid_scheme(field, value):
    with pytest.raises(ValidationError):
        EndpointConfig(**{field: value})
