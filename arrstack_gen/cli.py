"""Command line interface for compose generation."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from .arch import get_arch_warning, get_system_arch
from .config import get_config_path, load_settings
from .constants import COMPOSE_FILE_NAME
from .env_store import get_env_path
from .generator import generate_compose, persist_compose
from .models import CATEGORY_TITLES
from .registry import get_apps_by_category
from .structure import ensure_directory_structure


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arrstack-gen",
        description="Generate a docker-compose.yml for a self-hosted media stack.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Settings JSON file (default: ~/.arrstack/config.json).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output compose path (default: docker-compose.yml next to the settings).",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        help="The .env store to update (default: .env next to the compose file).",
    )
    parser.add_argument(
        "--create-dirs",
        action="store_true",
        help="Create the data/config directory skeleton under the root dir.",
    )
    parser.add_argument(
        "--list-apps",
        action="store_true",
        help="List the available apps and exit.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print generated compose without writing to disk.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def format_app_list() -> str:
    arch = get_system_arch()
    lines: List[str] = []
    for category, apps in get_apps_by_category().items():
        lines.append(f"{CATEGORY_TITLES[category]}:")
        for app in apps:
            port = app.default_port or "-"
            line = f"  {app.id:<22} {port!s:>6}  {app.description}"
            warning = get_arch_warning(app, arch)
            if warning:
                line += f"  [!] {warning}"
            lines.append(line)
    return "\n".join(lines)


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.list_apps:
        print(format_app_list())
        return 0

    try:
        config_path = args.config or get_config_path()
        settings = load_settings(config_path, migrate=not args.dry_run)
        if settings is None:
            logging.error("Settings file not found: %s", config_path)
            return 1

        if args.dry_run:
            if args.create_dirs:
                logging.info("Dry run enabled; skipping directory creation.")
            logging.info("Dry run enabled; compose not written to disk.")
            print(generate_compose(settings), end="")
            return 0

        if args.create_dirs:
            ensure_directory_structure(settings)

        output = args.output or config_path.with_name(COMPOSE_FILE_NAME)
        path = persist_compose(settings, output, args.env_file or get_env_path(output))
        logging.info("Compose for %d app(s) saved to %s", len(settings.enabled_apps()), path)
        return 0
    except Exception as exc:  # pragma: no cover - protects CLI UX
        logging.error("arrstack-gen failed: %s", exc)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
