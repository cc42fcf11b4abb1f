# src/main.py — v2
"""CLI entry point — serve, analyze commands.

Usage:
    glucolens serve [--host HOST] [--port PORT]
    glucolens analyze <image> [--server URL | --local]
    glucolens analyze --example URL [--server URL]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from glucolens.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="glucolens",
        description=f"glucolens v{__version__} — blood-glucose curve analysis",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- serve ---
    p_serve = subparsers.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default=None, help="Bind address (default: API_HOST)")
    p_serve.add_argument("--port", type=int, default=None, help="Port (default: API_PORT)")
    p_serve.set_defaults(func=_cmd_serve)

    # --- analyze ---
    p_analyze = subparsers.add_parser("analyze", help="Analyze one glucose-curve image")
    source = p_analyze.add_mutually_exclusive_group(required=True)
    source.add_argument("image", type=Path, nargs="?", help="Path to image file")
    source.add_argument("--example", default=None, help="URL of an example asset")
    target = p_analyze.add_mutually_exclusive_group()
    target.add_argument(
        "--server", default="http://127.0.0.1:8000",
        help="Base URL of a running glucolens server (default: http://127.0.0.1:8000)",
    )
    target.add_argument(
        "--local", action="store_true",
        help="Call the model in-process instead of going through a server",
    )
    p_analyze.set_defaults(func=_cmd_analyze)

    return parser


async def _cmd_serve(args: argparse.Namespace) -> int:
    """Run the FastAPI app under uvicorn."""
    import uvicorn

    from glucolens.api.app import create_app
    from glucolens.config.settings import Settings
    from glucolens.logging.logger import setup_logging_from_settings

    settings = Settings()
    setup_logging_from_settings(settings)

    config = uvicorn.Config(
        create_app(settings),
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        log_level=settings.log_level.lower(),
    )
    await uvicorn.Server(config).serve()
    return 0


async def _cmd_analyze(args: argparse.Namespace) -> int:
    """Run one analysis attempt and print the outcome."""
    if args.local:
        return await _analyze_local(args)

    from glucolens.session.controller import UploadSession
    from glucolens.session.transport import AnalysisTransport

    async with AnalysisTransport(base_url=args.server) as transport:
        session = UploadSession(transport)
        if args.example:
            state = await session.select_example(args.example)
        else:
            if not args.image.exists():
                logger.error("File not found: %s", args.image)
                return 1
            state = session.select_file(args.image)

        if state.error_message is None:
            state = await session.submit()

    if state.error_message is not None:
        print(f"Error: {state.error_message}", file=sys.stderr)
        return 1

    print(state.analysis_text)
    print(f"\nAnalysis time: {state.elapsed_seconds:.2f}s")
    return 0


async def _analyze_local(args: argparse.Namespace) -> int:
    from glucolens.api.facade import analyze_image
    from glucolens.core.errors import GlucolensError
    from glucolens.extraction.image_codec import load_image

    if args.image is None or not args.image.exists():
        logger.error("--local needs an existing image path")
        return 1

    try:
        analysis = await analyze_image(load_image(args.image))
    except GlucolensError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    print(analysis)
    return 0


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("anthropic").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
