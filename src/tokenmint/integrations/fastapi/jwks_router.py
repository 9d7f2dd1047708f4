"""FastAPI JWKS router — serves public keys at /.well-known/jwks.json and /jwks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter
from fastapi.responses import JSONResponse

if TYPE_CHECKING:
    from tokenmint.tokenmint import TokenMint


def create_jwks_router(mint: TokenMint) -> APIRouter:
    """Create a FastAPI router serving the JWKS endpoints.

    Mount at the root (no prefix) so the endpoint is at /.well-known/jwks.json.
    """
    router = APIRouter(tags=["jwks"])

    @router.get("/.well-known/jwks.json")
    @router.get("/jwks")
    async def jwks_endpoint():
        """Serve all non-expired public keys as a JWK Set (RFC 7517)."""
        jwk_set = mint.get_jwks()
        return JSONResponse(
            content=jwk_set.model_dump(),
            headers={
                "Cache-Control": f"public, max-age={mint.config.jwks_max_age_seconds}",
            },
        )

    return router
