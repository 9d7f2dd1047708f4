"""Tests for the tokenmint console script and instance bootstrap."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from tokenmint import TokenMint
from tokenmint import cli
from tokenmint.core.errors import KeyGenerationFailure


class TestDefaultPort:
    def test_defaults_to_8080(self, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        assert cli._default_port() == 8080

    def test_reads_port_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "9123")
        assert cli._default_port() == 9123

    def test_invalid_port_env_exits(self, monkeypatch):
        monkeypatch.setenv("PORT", "eighty")
        with pytest.raises(SystemExit):
            cli._default_port()


class TestMain:
    def test_no_command_prints_help_and_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == 1
        assert "tokenmint" in capsys.readouterr().out

    def test_serve_runs_uvicorn_factory(self, monkeypatch):
        import uvicorn

        calls = []
        monkeypatch.setattr(uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))
        monkeypatch.setenv("PORT", "9000")

        cli.main(["serve", "--host", "0.0.0.0"])

        args, kwargs = calls[0]
        assert args == ("tokenmint.cli:create_app",)
        assert kwargs["factory"] is True
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 9000

    def test_port_flag_overrides_env(self, monkeypatch):
        import uvicorn

        calls = []
        monkeypatch.setattr(uvicorn, "run", lambda *args, **kwargs: calls.append(kwargs))
        monkeypatch.setenv("PORT", "9000")

        cli.main(["serve", "--port", "7000"])
        assert calls[0]["port"] == 7000


class TestBootstrap:
    @pytest.mark.asyncio
    async def test_create_app_serves_routes(self):
        app = cli.create_app()
        assert isinstance(app, FastAPI)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            assert (await client.get("/.well-known/jwks.json")).status_code == 200
            assert (await client.get("/jwks")).status_code == 200
            assert (await client.post("/auth")).status_code == 200
            assert (await client.post("/auth?expired=true")).status_code == 200
            assert (await client.get("/auth")).status_code == 405

    def test_seeds_one_valid_and_one_expired_key(self):
        mint = TokenMint()
        assert len(mint.registry) == 2
        assert mint.registry.find_valid() is not None
        assert mint.registry.find_expired() is not None
        assert len(mint.get_jwks().keys) == 1

    def test_seed_counts_are_configurable(self, fast_keys):
        mint = TokenMint(seed_valid_keys=3, seed_expired_keys=0)
        assert len(mint.registry) == 3
        assert mint.registry.find_expired() is None

    def test_seeding_failure_refuses_to_start(self, monkeypatch):
        def broken(key_size=2048):
            raise KeyGenerationFailure("no entropy")

        monkeypatch.setattr("tokenmint.core.registry.generate_key_pair", broken)
        with pytest.raises(KeyGenerationFailure):
            TokenMint()
