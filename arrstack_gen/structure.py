"""Create the TRaSH-style data/config directory skeleton under the root dir."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from .models import GlobalSettings
from .registry import get_app

logger = logging.getLogger(__name__)

BASE_DIRS = ["torrents", "usenet", "media"]

CONTENT_TYPES = {
    "radarr": "movies",
    "sonarr": "tv",
    "lidarr": "music",
    "readarr": "books",
    "mylar3": "comics",
    "whisparr": "adult",
}


def planned_directories(settings: GlobalSettings) -> List[Path]:
    """Return every directory the skeleton needs, parents before children."""
    root = Path(settings.root_dir)
    data_root = root / "data"
    config_root = root / "config"
    enabled = {app.id for app in settings.enabled_apps()}

    dirs: List[Path] = [data_root, config_root]
    dirs.extend(data_root / name for name in BASE_DIRS)

    for app_id, content_type in CONTENT_TYPES.items():
        if app_id in enabled:
            # Torrents and media are flat, usenet keeps categories under complete/.
            dirs.append(data_root / "torrents" / content_type)
            dirs.append(data_root / "usenet" / "complete" / content_type)
            dirs.append(data_root / "media" / content_type)

    dirs.append(data_root / "media" / "photos")
    dirs.append(data_root / "usenet" / "incomplete")
    dirs.append(data_root / "usenet" / "complete")
    for base in ("torrents", "usenet"):
        for name in ("console", "software", "watch"):
            dirs.append(data_root / base / name)

    if "prowlarr" in enabled:
        dirs.append(data_root / "torrents" / "prowlarr")
        dirs.append(data_root / "usenet" / "prowlarr")
    if "filebot" in enabled:
        dirs.append(data_root / "filebot" / "input")
        dirs.append(data_root / "filebot" / "output")
    if "audiobookshelf" in enabled:
        dirs.append(data_root / "media" / "audiobooks")
        dirs.append(data_root / "media" / "podcasts")

    for selection in settings.enabled_apps():
        app_def = get_app(selection.id)
        if app_def is None:
            continue
        if any("/config/" in volume for volume in app_def.volumes("$ROOT")):
            dirs.append(config_root / selection.id)

    if "traefik" in enabled:
        dirs.append(config_root / "traefik" / "letsencrypt")

    return list(dict.fromkeys(dirs))


def ensure_directory_structure(settings: GlobalSettings) -> List[Path]:
    """Create the skeleton; permission problems are logged, not raised.

    Nothing is created when no root directory is configured.
    """
    if not settings.root_dir:
        logger.warning("No root directory configured; skipping directory creation")
        return []

    dirs = planned_directories(settings)
    try:
        for path in dirs:
            path.mkdir(parents=True, exist_ok=True)
    except PermissionError as exc:
        logger.warning(
            "Permission denied when creating directories at %s; create them manually (%s)",
            settings.root_dir,
            exc,
        )
        return []
    logger.info("Directory structure ready under %s", settings.root_dir)
    return dirs
