"""TokenMint — instance-based issuer configuration and entry point."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tokenmint.config import TokenMintConfig
from tokenmint.core.registry import KeyRecord, KeyRegistry
from tokenmint.core.schemas import JWKSResponse
from tokenmint.core.tokens import IssuedToken, issue_token
from tokenmint.events import EventCollector, HookRegistry, KeyGenerated, TokenIssued

if TYPE_CHECKING:
    from fastapi import APIRouter, FastAPI

logger = logging.getLogger("tokenmint")


class TokenMint:
    """Main TokenMint instance — owns the config, the key registry, and hooks.

    The registry is seeded on construction with ``seed_valid_keys`` valid and
    ``seed_expired_keys`` already-expired keys, so expired-token issuance works
    immediately. A seeding failure propagates out of the constructor.

    Args:
        key_ttl: Signing key lifetime in seconds, either side of now (default 3600).
        token_ttl: Token lifetime in seconds, either side of now (default 3600).
        subject: ``sub`` claim placed in every token (default "username").
        issuer: ``iss`` claim placed in every token (default "tokenmint").
        jwks_max_age: Cache-Control max-age for the JWKS endpoints (default 3600).
        seed_valid_keys: Valid keys generated at startup (default 1).
        seed_expired_keys: Expired keys generated at startup (default 1).
    """

    def __init__(
        self,
        *,
        key_ttl: int = 3600,
        token_ttl: int = 3600,
        subject: str = "username",
        issuer: str = "tokenmint",
        jwks_max_age: int = 3600,
        seed_valid_keys: int = 1,
        seed_expired_keys: int = 1,
    ) -> None:
        self._config = TokenMintConfig(
            key_ttl_seconds=key_ttl,
            token_ttl_seconds=token_ttl,
            subject=subject,
            issuer=issuer,
            jwks_max_age_seconds=jwks_max_age,
            seed_valid_keys=seed_valid_keys,
            seed_expired_keys=seed_expired_keys,
        )
        self._registry = KeyRegistry(self._config)
        self._hooks = HookRegistry()
        self._seed()

    def _seed(self) -> None:
        for _ in range(self._config.seed_valid_keys):
            self._registry.generate(expired=False)
        for _ in range(self._config.seed_expired_keys):
            self._registry.generate(expired=True)
        logger.info("Key registry seeded with %d key(s)", len(self._registry))

    @property
    def config(self) -> TokenMintConfig:
        """Read-only access to the internal config."""
        return self._config

    @property
    def registry(self) -> KeyRegistry:
        """Access the key registry (e.g., for testing)."""
        return self._registry

    @property
    def hooks(self) -> HookRegistry:
        """Access the hook registry."""
        return self._hooks

    # ------ Event hooks ------

    def on(self, event_name: str):
        """Decorator to register an event hook.

        Usage:
            @mint.on("token_issued")
            async def handle(event):
                print(event.kid)
        """
        def decorator(fn):
            self._hooks.register(event_name, fn)
            return fn
        return decorator

    def add_hook(self, event_name: str, callback) -> None:
        """Register an event hook callback programmatically."""
        self._hooks.register(event_name, callback)

    # ------ Core operations ------

    async def issue_token(self, *, expired: bool = False) -> IssuedToken:
        """Sign a token with the first valid key, or the first expired key.

        Raises:
            NoKeyAvailable: If no key of the requested kind exists.
        """
        collector = EventCollector(self._hooks)
        issued = issue_token(self._registry, self._config, want_expired=expired)
        collector.collect(
            "token_issued",
            TokenIssued(kid=issued.kid, expired=issued.expired, expires_at=issued.expires_at),
        )
        await collector.flush()
        return issued

    async def generate_key(self, *, expired: bool = False) -> KeyRecord:
        """Generate and register a new signing key.

        Programmatic only: there is no HTTP endpoint for key generation.

        Raises:
            KeyGenerationFailure: If RSA key generation fails.
        """
        collector = EventCollector(self._hooks)
        record = self._registry.generate(expired=expired)
        collector.collect(
            "key_generated",
            KeyGenerated(kid=record.kid, expires_at=record.expires_at, expired=expired),
        )
        await collector.flush()
        return record

    def get_jwks(self) -> JWKSResponse:
        """JWK Set of all currently valid keys."""
        return JWKSResponse(keys=self._registry.public_key_set())

    # ------ FastAPI integration ------

    def fastapi_router(self) -> APIRouter:
        """Create a FastAPI router with the /auth issuance endpoint.

        Mount at the root (no prefix) so the endpoint is at /auth.
        """
        from tokenmint.integrations.fastapi.router import create_auth_router

        return create_auth_router(self)

    def jwks_router(self) -> APIRouter:
        """Create a FastAPI router for the JWKS endpoints.

        Serves /.well-known/jwks.json and the legacy /jwks alias.

        Usage:
            app.include_router(mint.fastapi_router())
            app.include_router(mint.jwks_router())
        """
        from tokenmint.integrations.fastapi.jwks_router import create_jwks_router

        return create_jwks_router(self)

    def fastapi_app(self, *, title: str = "TokenMint") -> FastAPI:
        """Create a FastAPI app with both routers mounted at the root."""
        from fastapi import FastAPI

        app = FastAPI(title=title)
        app.include_router(self.fastapi_router())
        app.include_router(self.jwks_router())
        return app
