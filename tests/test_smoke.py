"""Smoke tests — verify all modules import cleanly."""


def test_import_core():
    from tokenmint.core.errors import EncodingFailure, KeyGenerationFailure, NoKeyAvailable, TokenMintError
    from tokenmint.core.keys import generate_key_pair, generate_kid, public_key_to_jwk, to_base64url
    from tokenmint.core.registry import KeyRecord, KeyRegistry
    from tokenmint.core.schemas import JWKSResponse, PublicKeyView, TokenResponse
    from tokenmint.core.tokens import (
        IssuedToken,
        create_token,
        decode_token,
        get_unverified_header,
        issue_token,
    )


def test_import_integrations():
    from tokenmint.integrations.fastapi import create_auth_router, create_jwks_router


def test_import_config():
    from tokenmint.config import JWT_ALGORITHM, TokenMintConfig


def test_import_cli():
    from tokenmint.cli import create_app, main


def test_public_api():
    import tokenmint

    for name in tokenmint.__all__:
        assert hasattr(tokenmint, name), name
