"""Settings file handling.

Settings live as camelCase JSON in ``~/.arrstack/config.json`` (the directory
can be moved with ``ARRSTACK_HOME``). The generated compose file and its
``.env`` store sit next to it by default.
"""
from __future__ import annotations

import json
import logging
import os
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from . import __version__
from .constants import COMPOSE_FILE_NAME
from .models import GlobalSettings

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "ARRSTACK_HOME"
CONFIG_DIR_NAME = ".arrstack"
CONFIG_FILE_NAME = "config.json"
BACKUP_DIR_NAME = "backups"


def get_config_dir() -> Path:
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_DIR_NAME


def get_config_path() -> Path:
    return get_config_dir() / CONFIG_FILE_NAME


def get_backup_dir() -> Path:
    return get_config_dir() / BACKUP_DIR_NAME


def get_compose_path() -> Path:
    return get_config_dir() / COMPOSE_FILE_NAME


def detect_timezone() -> str:
    localtime = Path("/etc/localtime")
    if localtime.is_symlink():
        target = os.readlink(localtime)
        if "zoneinfo/" in target:
            return target.split("zoneinfo/", 1)[1]

    tz = os.environ.get("TZ")
    if tz:
        return tz
    return "UTC"


def detect_uid() -> int:
    getuid = getattr(os, "getuid", None)
    return getuid() if getuid else 1000


def detect_gid() -> int:
    getgid = getattr(os, "getgid", None)
    return getgid() if getgid else 1000


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def create_default_settings(root_dir: str) -> GlobalSettings:
    now = _now()
    return GlobalSettings(
        version=__version__,
        root_dir=root_dir,
        timezone=detect_timezone(),
        uid=detect_uid(),
        gid=detect_gid(),
        umask="002",
        created_at=now,
        updated_at=now,
    )


def load_settings(path: Optional[Path] = None, migrate: bool = True) -> Optional[GlobalSettings]:
    """Load settings from ``path``; ``None`` when the file does not exist.

    Files written by an older version are re-stamped with the current version
    and saved back (with a backup) before being returned. With ``migrate=False``
    the file is only read and the stored version is left as it is.
    """
    config_path = path or get_config_path()
    if not config_path.exists():
        return None

    logger.info("Loading settings file: %s", config_path)
    data = json.loads(config_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a JSON object: {config_path}")

    settings = GlobalSettings.model_validate(data)
    if migrate and settings.version != __version__:
        logger.info("Migrating settings from version %r to %s", settings.version or None, __version__)
        settings.version = __version__
        if not settings.created_at:
            settings.created_at = _now()
        save_settings(settings, config_path)
    return settings


def backup_settings(path: Path) -> Optional[Path]:
    if not path.exists():
        return None
    backup_dir = path.parent / BACKUP_DIR_NAME
    backup_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S-%f")
    backup_path = backup_dir / f"config-{stamp}.json"
    shutil.copy2(path, backup_path)
    logger.debug("Settings backed up to %s", backup_path)
    return backup_path


def save_settings(settings: GlobalSettings, path: Optional[Path] = None) -> Path:
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    backup_settings(config_path)

    settings.updated_at = _now()
    config_path.write_text(settings.to_json(), encoding="utf-8")
    logger.info("Settings written to %s", config_path)
    return config_path
