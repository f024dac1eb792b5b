"""Pytest fixtures for all tests."""

import itertools

import pytest
from httpx import AsyncClient, ASGITransport

from config import Config, GeneratorConfig, VerifyConfig, LoggingConfig
from prefixed import Options, VerifyTokenParams
from ui.app import create_app

TEST_KEY = b"test-secret-key"


@pytest.fixture
def params():
    """Verification params shared by generate and verify."""
    return VerifyTokenParams(length=12, key=TEST_KEY)


@pytest.fixture
def zero_bytes():
    """Random source that always returns zero octets."""
    return lambda n: bytes(n)


@pytest.fixture
def ticking_clock():
    """Clock returning strictly increasing milliseconds."""
    counter = itertools.count(1_700_000_000_000)
    return lambda: next(counter)


@pytest.fixture
def signed_options(params):
    return Options(include_verify_token=params)


@pytest.fixture
def app_config():
    """Config with verification tokens enabled and an inline key."""
    return Config(
        generator=GeneratorConfig(),
        verify=VerifyConfig(enabled=True, length=12, key="route-test-key"),
        logging=LoggingConfig(level="ERROR"),
    )


@pytest.fixture
async def app(app_config):
    """Create test FastAPI app."""
    return create_app(app_config)


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
