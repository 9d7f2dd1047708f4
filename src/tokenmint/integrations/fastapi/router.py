"""FastAPI auth router — POST /auth issues a signed token, other methods get 405."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException

from tokenmint.core.errors import TokenMintError
from tokenmint.core.schemas import TokenResponse

if TYPE_CHECKING:
    from tokenmint.tokenmint import TokenMint


def _error_detail(e: TokenMintError) -> dict:
    """Build HTTPException detail dict from a TokenMintError."""
    return {"error": e.code, "message": e.message}


def create_auth_router(mint: TokenMint) -> APIRouter:
    """Create a FastAPI router with the token issuance endpoint.

    ``expired=true`` (exactly that string) asks for a token signed with an
    expired key and carrying an ``exp`` in the past; any other value, or no
    value, asks for a normal token.
    """
    router = APIRouter(tags=["auth"])

    @router.post("/auth", response_model=TokenResponse)
    async def auth_endpoint(expired: str | None = None):
        try:
            issued = await mint.issue_token(expired=expired == "true")
        except TokenMintError as e:
            raise HTTPException(status_code=e.status_code, detail=_error_detail(e))
        return TokenResponse(token=issued.token)

    @router.api_route("/auth", methods=["GET", "PUT", "DELETE", "PATCH"], include_in_schema=False)
    async def auth_method_not_allowed():
        raise HTTPException(
            status_code=405,
            detail="Method Not Allowed",
            headers={"Allow": "POST"},
        )

    return router
