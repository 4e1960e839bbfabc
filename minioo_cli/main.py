"""CLI entrypoint for running the minioo sample scenario."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from minioo_core import ObjectRuntimeError, Runtime, RuntimeConfig

from .demo import run_demo

CLI_VERSION = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minioo",
        description="minioo - a small class-based object runtime.",
    )
    parser.add_argument("--version", action="version", version=f"minioo v{CLI_VERSION}")
    parser.add_argument("--config", type=Path, help="path to a config.toml file")
    parser.add_argument("--log-level", dest="log_level", help="logging level (default from config)")
    subparsers = parser.add_subparsers(dest="command")

    demo = subparsers.add_parser("demo", help="run the Base/Derived sample scenario")
    demo.add_argument(
        "--events",
        action="store_true",
        help="also print each lifecycle event as it is emitted",
    )
    demo.set_defaults(func=_handle_demo)
    return parser


def _handle_demo(args: argparse.Namespace, runtime: Runtime) -> int:
    if args.events:
        runtime.events.subscribe(lambda event: print(f"[{event.name}] {event.payload}"))
    run_demo(runtime)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else sys.argv[1:])
    if getattr(args, "func", None) is None:
        parser.print_help()
        return 0

    config = RuntimeConfig.load(args.config)
    logging.basicConfig(
        level=(args.log_level or config.log_level).upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    runtime = Runtime(config=config)
    try:
        return args.func(args, runtime)
    except ObjectRuntimeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
