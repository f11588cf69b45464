from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Optional, Sequence

from dotenv import dotenv_values

from packer_config.config import ConfigLoadRequest, Configuration, JsonConfigLoader
from packer_config.errors import ConfigError
from packer_config.logging import init_logging, logging_settings_from_env
from packer_config.plugins import PluginCategory

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="packer-config", description="Inspect the effective plugin configuration")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the JSON config file (default: $PACKER_CONFIG or ~/.packerconfig)",
    )
    parser.add_argument(
        "--no-dotenv",
        action="store_true",
        help="Disable loading .env (process environment still applies)",
    )
    parser.add_argument(
        "--no-discover",
        action="store_true",
        help="Skip plugin discovery and show only explicitly configured plugins",
    )
    parser.add_argument(
        "--tool-name",
        default="packer",
        help="Plugin filename prefix (default: packer)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    # Command: plugins
    plugins_parser = subparsers.add_parser("plugins", help="List bound plugins")
    plugins_parser.add_argument(
        "--category",
        choices=[category.value for category in PluginCategory],
        action="append",
        default=None,
        help="Only list plugins of this category (repeatable)",
    )

    # Command: show
    subparsers.add_parser("show", help="Print the merged configuration as JSON")

    return parser


def _load_environ(use_dotenv: bool) -> Mapping[str, str]:
    environ: dict[str, str] = {}
    if use_dotenv:
        environ.update({k: v for k, v in dotenv_values(".env").items() if v is not None})
    environ.update(os.environ)
    return environ


def _own_executable(argv0: str) -> Optional[str]:
    """Path of the launched program, or None when it is not a real file such as under `-c` or `-m`."""
    if not argv0:
        return None
    path = Path(argv0).resolve()
    if not path.is_file() or path == Path(__file__).resolve():
        return None
    return str(path)


def _print_plugins(config: Configuration, categories: Optional[Sequence[str]]) -> None:
    for category in PluginCategory:
        if categories and category.value not in categories:
            continue
        for name, path in config.mapping_for(category).items():
            print(f"{category.value}\t{name}\t{path}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    environ = _load_environ(not args.no_dotenv)
    init_logging(logging_settings_from_env(environ))

    request = ConfigLoadRequest(
        config_path=args.config,
        environ=environ,
        executable=_own_executable(sys.argv[0]),
        cwd=os.getcwd(),
        discover_plugins=not args.no_discover,
        tool_name=args.tool_name,
    )
    try:
        config = JsonConfigLoader().load(request)
    except ConfigError as e:
        logger.debug("config.load_failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.command == "plugins":
        _print_plugins(config, args.category)
    elif args.command == "show":
        print(json.dumps(config.to_json_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
