#!/usr/bin/env python3
"""
Blueprint Graph - Console tool.

Repairs and lays out a generated graph description without any
rendering front end.

Usage:
    blueprint-graph layout response.json
    blueprint-graph layout response.txt -o positioned.json
    cat response.json | blueprint-graph layout - --debug
    blueprint-graph layout response.json --config layout.toml
"""
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from .config import AppConfig, ConfigManager
from .errors import BlueprintPayloadError
from .generation.pipeline import build_blueprint
from .logging import setup_logging


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _load_config(path: Optional[str]) -> Optional[AppConfig]:
    """Read settings for one run; None when the given file does not exist."""
    if not path:
        return AppConfig()
    if not Path(path).is_file():
        return None
    return ConfigManager(path).data


def cmd_layout(args, config: AppConfig) -> int:
    """
    Normalize, resolve and lay out one graph description.

    Returns:
        Process exit code
    """
    settings = config.layout

    try:
        text = _read_input(args.input)
        blueprint = build_blueprint(text, settings)
    except OSError as e:
        logger.error(f"Cannot read {args.input}: {e}")
        return 1
    except BlueprintPayloadError as e:
        logger.error(f"Invalid graph description: {e}")
        return 1

    for dropped in blueprint.dropped_edges:
        logger.warning(f"Dropped edge #{dropped.index}: {dropped.reason.value}")

    output = json.dumps(blueprint.to_dict(), indent=args.indent)
    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        print(f"✓ Wrote {len(blueprint.nodes)} nodes, {len(blueprint.edges)} edges to {args.output}")
    else:
        print(output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blueprint-graph",
        description="Repair and lay out generated blueprint graphs",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    layout_parser = subparsers.add_parser("layout", help="Normalize, resolve and lay out a graph")
    layout_parser.add_argument("input", help="Graph description file, or - for stdin")
    layout_parser.add_argument("-o", "--output", help="Write positioned graph JSON here")
    layout_parser.add_argument("--config", help="JSON or TOML settings file")
    layout_parser.add_argument("--indent", type=int, default=2, help="JSON indentation")
    layout_parser.set_defaults(func=cmd_layout)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        setup_logging(debug_mode=args.debug)
        parser.print_help()
        return 1

    config = _load_config(getattr(args, "config", None))
    if config is None:
        setup_logging(debug_mode=args.debug)
        logger.error(f"Config file not found: {args.config}")
        return 1

    setup_logging(
        debug_mode=args.debug or config.general.debug_mode,
        log_dir=config.general.log_dir,
    )
    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
