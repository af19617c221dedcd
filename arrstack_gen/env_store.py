"""Read and update the flat KEY=value ``.env`` store next to the compose file."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Mapping

from .constants import COMPOSE_FILE_NAME, ENV_FILE_NAME

logger = logging.getLogger(__name__)


def get_env_path(compose_path: Path) -> Path:
    """Return the ``.env`` path the compose runner reads for ``compose_path``."""
    if compose_path.name == COMPOSE_FILE_NAME:
        return compose_path.with_name(ENV_FILE_NAME)
    return compose_path.parent / ENV_FILE_NAME


def parse_env_file(content: str) -> Dict[str, str]:
    """Parse ``KEY=value`` lines, skipping blanks and ``#`` comments.

    Values may contain ``=``; keys and values are stripped.
    """
    env: Dict[str, str] = {}
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, value = stripped.partition("=")
        key = key.strip()
        if key and sep:
            env[key] = value.strip()
    return env


def serialize_env(env: Mapping[str, str]) -> str:
    return "\n".join(f"{key}={value}" for key, value in env.items())


def read_env(path: Path) -> Dict[str, str]:
    if not path.exists():
        return {}
    return parse_env_file(path.read_text(encoding="utf-8"))


def update_env(path: Path, updates: Mapping[str, str]) -> Dict[str, str]:
    """Merge ``updates`` into the store at ``path`` and write it back.

    Existing keys are never removed; updated keys keep their position.
    """
    merged = read_env(path)
    merged.update(updates)

    content = serialize_env(merged)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"{content}\n" if content else "", encoding="utf-8")
    logger.debug("Updated %d key(s) in %s", len(updates), path)
    return merged
