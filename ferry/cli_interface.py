#!/usr/bin/env python3
"""
Ferry CLI Interface
Command-line access to the platform hierarchy and target resolution
"""
import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import get_settings
from .exceptions import FerryError
from .services.platforms import create_default_registry, list_all
from .services.target import target_config, validate_backend
from .utils.logging_security import redact_config

logger = logging.getLogger(__name__)


class FerryCLI:
    """Main CLI interface for ferry"""

    def __init__(self):
        self.settings = get_settings()

    def show_platforms(self, definitions: Optional[str] = None) -> int:
        """Print the family/platform tree"""
        registry = create_default_registry(definitions or self.settings.platform_definitions)
        list_all(registry, sys.stdout)
        return 0

    def resolve_target(
        self,
        target: str,
        keys: Optional[List[str]] = None,
        sudo: bool = False,
        default_backend: Optional[str] = None,
    ) -> int:
        """Resolve a target and print the configuration as JSON"""
        config = {"target": target}
        if keys:
            config["keys"] = keys
        if sudo:
            config["sudo"] = True

        resolved = target_config(config)
        validate_backend(resolved, default_backend or self.settings.default_backend)
        print(json.dumps(redact_config(resolved), indent=2, sort_keys=True, default=str))
        return 0


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser"""
    parser = argparse.ArgumentParser(
        prog="ferry",
        description="Ferry - platform classification and connection target resolution",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    platforms_parser = subparsers.add_parser("platforms", help="Print the platform family tree")
    platforms_parser.add_argument("--definitions", help="YAML file with family/platform definitions")

    target_parser = subparsers.add_parser("target", help="Resolve a connection target")
    target_parser.add_argument("target", help="Target URI, e.g. ssh://user@host:22")
    target_parser.add_argument(
        "--key", "-i", dest="keys", action="append", default=[], help="Key file or inline key (repeatable)"
    )
    target_parser.add_argument("--sudo", action="store_true", help="Request privilege elevation")
    target_parser.add_argument("--default-backend", help="Backend used when none can be determined")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    cli = FerryCLI()
    try:
        if args.command == "platforms":
            return cli.show_platforms(args.definitions)
        if args.command == "target":
            return cli.resolve_target(args.target, args.keys, args.sudo, args.default_backend)
    except FerryError as e:
        logger.debug("Command %s failed: %r", args.command, e)
        print(f"[ferry] ERROR: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
