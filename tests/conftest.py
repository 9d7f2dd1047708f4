"""Test fixtures for TokenMint unit and HTTP tests."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tokenmint import TokenMint
from tokenmint.core.keys import generate_key_pair


@pytest.fixture(scope="session")
def rsa_key():
    """One real RSA key pair shared by tests that only care about key selection."""
    return generate_key_pair()


@pytest.fixture
def fast_keys(monkeypatch, rsa_key):
    """Make KeyRegistry.generate reuse the shared key instead of generating a new one."""
    monkeypatch.setattr(
        "tokenmint.core.registry.generate_key_pair",
        lambda key_size=2048: rsa_key,
    )
    return rsa_key


@pytest.fixture
def mint():
    """A TokenMint instance seeded with one valid and one expired key."""
    return TokenMint()


@pytest_asyncio.fixture
async def client(mint: TokenMint):
    """Async HTTP client for testing against the FastAPI app."""
    async with AsyncClient(
        transport=ASGITransport(app=mint.fastapi_app()),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def mint_no_expired():
    """TokenMint with no expired keys, for the no-key scenario."""
    return TokenMint(seed_expired_keys=0)


@pytest_asyncio.fixture
async def client_no_expired(mint_no_expired: TokenMint):
    """HTTP client for an issuer that holds only valid keys."""
    async with AsyncClient(
        transport=ASGITransport(app=mint_no_expired.fastapi_app()),
        base_url="http://test",
    ) as client:
        yield client
