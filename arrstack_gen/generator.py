"""Compose generation entry points.

``generate_compose`` is a pure function of the settings; ``persist_compose``
writes its result and mirrors the global settings into the ``.env`` store.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from .arch import get_arch_warning
from .config import get_compose_path
from .constants import ENV_PGID, ENV_PUID, ENV_ROOT_DIR, ENV_TIMEZONE, ENV_UMASK
from .env_store import get_env_path, update_env
from .models import AppDefinition, ComposeService, GlobalSettings
from .registry import APPS
from .service_builder import BuildOutcome, BuildResult, resolve_selection
from .vpn import route_through_vpn
from .yaml_out import serialize_services, write_compose_file

logger = logging.getLogger(__name__)


def build_services(
    settings: GlobalSettings,
    registry: Optional[Mapping[str, AppDefinition]] = None,
) -> Tuple[Dict[str, ComposeService], List[BuildResult]]:
    """Build one service per enabled, known selection, in selection order.

    VPN routing is applied to the map before it is returned, together with
    an outcome for every selection (including the skipped ones).
    """
    apps = APPS if registry is None else registry
    services: Dict[str, ComposeService] = {}
    results: List[BuildResult] = []

    logger.debug("Generating compose for %d enabled apps", len(settings.enabled_apps()))
    for selection in settings.apps:
        result = resolve_selection(selection, settings, apps)
        results.append(result)
        if result.outcome != BuildOutcome.BUILT:
            continue

        warning = get_arch_warning(apps[selection.id])
        if warning:
            logger.warning(warning)
        services[selection.id] = result.service

    route_through_vpn(services, settings, apps)
    return services, results


def generate_compose(settings: GlobalSettings) -> str:
    services, _ = build_services(settings)
    return serialize_services(services)


def env_updates(settings: GlobalSettings) -> Dict[str, str]:
    return {
        ENV_ROOT_DIR: settings.root_dir,
        ENV_TIMEZONE: settings.timezone,
        ENV_PUID: str(settings.uid),
        ENV_PGID: str(settings.gid),
        ENV_UMASK: settings.umask,
    }


def persist_compose(
    settings: GlobalSettings,
    compose_path: Optional[Path] = None,
    env_path: Optional[Path] = None,
) -> Path:
    """Write the compose file, then update the ``.env`` store.

    Write errors propagate unchanged; the ``.env`` store is only touched once
    the compose file is in place.
    """
    yaml_text = generate_compose(settings)
    target = compose_path or get_compose_path()
    write_compose_file(yaml_text, target)
    update_env(env_path or get_env_path(target), env_updates(settings))
    return target
