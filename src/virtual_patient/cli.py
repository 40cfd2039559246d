"""Command-line entry point: ``virtual-patient``."""

from __future__ import annotations

import argparse
import json
import random
from typing import TYPE_CHECKING

from virtual_patient import __version__
from virtual_patient.config import get_settings
from virtual_patient.services.profile_generator import generate_random_profile

if TYPE_CHECKING:
    from collections.abc import Sequence


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="virtual-patient",
        description="Simulated psychological patients for consultation practice.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("version", help="Print the package version")

    profile = subparsers.add_parser("profile", help="Print a random patient profile as JSON")
    profile.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")

    serve = subparsers.add_parser("serve", help="Run the HTTP API (from the project root)")
    serve.add_argument("--host", default=None, help="Bind address (default: API_HOST)")
    serve.add_argument("--port", type=int, default=None, help="Port (default: API_PORT)")
    serve.add_argument("--reload", action="store_true", help="Enable hot reload (dev only)")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "version":
        print(__version__)
        return 0

    if args.command == "profile":
        rng = random.Random(args.seed) if args.seed is not None else None
        profile = generate_random_profile(rng)
        print(json.dumps(profile.to_dict(), indent=2))
        return 0

    # serve
    import uvicorn

    api = get_settings().api
    uvicorn.run(
        "server:app",
        host=args.host or api.host,
        port=args.port or api.port,
        reload=args.reload or api.reload,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
