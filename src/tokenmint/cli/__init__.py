"""TokenMint CLI — run the issuer as a standalone HTTP server."""

import argparse
import logging
import os
import sys

logger = logging.getLogger("tokenmint.cli")

DEFAULT_PORT = 8080


def create_app():
    """uvicorn factory: a fresh TokenMint instance (freshly seeded keys) per process."""
    from tokenmint.tokenmint import TokenMint

    return TokenMint().fastapi_app(title="TokenMint JWKS Server")


def _default_port() -> int:
    raw = os.environ.get("PORT")
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        raise SystemExit(f"Invalid PORT value: {raw!r}")


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``tokenmint`` console script."""
    parser = argparse.ArgumentParser(prog="tokenmint", description="TokenMint CLI")
    sub = parser.add_subparsers(dest="command")

    serve_cmd = sub.add_parser("serve", help="Serve the JWKS and /auth endpoints")
    serve_cmd.add_argument("--host", default="127.0.0.1", help="Bind address (default 127.0.0.1)")
    serve_cmd.add_argument(
        "--port",
        type=int,
        default=None,
        help=f"Port to listen on (default: $PORT or {DEFAULT_PORT})",
    )
    serve_cmd.add_argument("--log-level", default="info", help="Log level (default info)")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "serve":
        _serve(args.host, args.port if args.port is not None else _default_port(), args.log_level)


def _serve(host: str, port: int, log_level: str) -> None:
    """Run the app under uvicorn."""
    import uvicorn

    logging.basicConfig(level=log_level.upper())
    logger.info("JWKS server running at http://%s:%d", host, port)
    uvicorn.run(
        "tokenmint.cli:create_app",
        factory=True,
        host=host,
        port=port,
        log_level=log_level,
    )
