"""CLI entry point for the hooklog server."""

import argparse
import os


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="hooklog-server",
        description="hooklog: signed webhook receiver with an in-memory event log",
    )
    parser.add_argument("--host", default=None, help="Bind host (default: HOOKLOG_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: HOOKLOG_PORT or 8080)")
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Development mode: colored console logs instead of JSON",
    )
    args = parser.parse_args(argv)

    # Must be set before hooklog.config builds its settings.
    if args.dev:
        os.environ["HOOKLOG_JSON_LOGS"] = "0"

    import uvicorn

    from hooklog.config import settings

    # A single worker: the event log lives in this process only.
    # log_config=None lets uvicorn's records flow through the structlog formatter.
    uvicorn.run(
        "hooklog.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
