"""FastAPI integration for TokenMint."""

from tokenmint.integrations.fastapi.jwks_router import create_jwks_router
from tokenmint.integrations.fastapi.router import create_auth_router

__all__ = [
    "create_auth_router",
    "create_jwks_router",
]
