"""bridgegen command-line interface.

Usage::

    bridgegen init
    bridgegen generate -c corebridge.config.json -o ./packages
    bridgegen generate --core-only --contracts-only
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from bridgegen import __version__
from bridgegen.config import DEFAULT_CONFIG_FILENAME, ProjectConfig, write_default_config
from bridgegen.errors import BridgegenError
from bridgegen.orchestrator import GenerationOrchestrator
from bridgegen.utils import console, print_error, print_success


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bridgegen",
        description="CoreBridge -- generate core, contracts and platform adapter packages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  bridgegen init\n"
            "  bridgegen generate -o ./packages\n"
            "  bridgegen generate --adapters-only\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init = subparsers.add_parser("init", help=f"Write a default {DEFAULT_CONFIG_FILENAME}")
    init.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILENAME,
        help=f"Config file to create (default: {DEFAULT_CONFIG_FILENAME})",
    )
    init.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing config file",
    )

    generate = subparsers.add_parser("generate", help="Generate packages from the config")
    generate.add_argument(
        "--config", "-c",
        default=DEFAULT_CONFIG_FILENAME,
        help=f"Config file to read (default: {DEFAULT_CONFIG_FILENAME})",
    )
    generate.add_argument(
        "--output", "-o",
        default=None,
        help="Output directory (overrides outputDir from the config)",
    )
    generate.add_argument("--core-only", action="store_true", help="Generate the core package")
    generate.add_argument(
        "--contracts-only", action="store_true", help="Generate the contracts package"
    )
    generate.add_argument(
        "--adapters-only", action="store_true", help="Generate the adapter packages"
    )
    return parser


def _cmd_init(args: argparse.Namespace) -> None:
    path = write_default_config(Path(args.config), force=args.force)
    print_success(f"Created {path}")
    console.print("Edit the domains and adapters, then run [bold]bridgegen generate[/bold].")


def _cmd_generate(args: argparse.Namespace) -> None:
    config = ProjectConfig.load(Path(args.config))
    if args.output:
        config = config.model_copy(update={"output_dir": Path(args.output)})

    orchestrator = GenerationOrchestrator(config)
    result = asyncio.run(
        orchestrator.run(
            core_only=args.core_only,
            contracts_only=args.contracts_only,
            adapters_only=args.adapters_only,
        )
    )
    print_success(f"Generated {len(result.packages)} package(s).")


_COMMANDS = {
    "init": _cmd_init,
    "generate": _cmd_generate,
}


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``bridgegen`` and ``python -m bridgegen``."""
    args = build_parser().parse_args(argv)
    try:
        _COMMANDS[args.command](args)
    except (BridgegenError, OSError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
