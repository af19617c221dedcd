"""Turn one app selection into a compose service description."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional

from .constants import (
    HOST_NETWORK_APP,
    IDENTITY_ENV_APPS,
    PGID_VAR,
    PUID_VAR,
    RESTART_POLICY,
    ROOT_DIR_VAR,
    TIMEZONE_VAR,
    UMASK_VAR,
)
from .models import AppDefinition, AppSelection, ComposeService, GlobalSettings
from .proxy_labels import build_huntarr_widget_labels, build_proxy_labels, proxy_labels_applicable
from .registry import APPS

logger = logging.getLogger(__name__)


class BuildOutcome(str, Enum):
    BUILT = "built"
    SKIPPED_UNKNOWN_APP = "skipped_unknown_app"
    SKIPPED_DISABLED = "skipped_disabled"


@dataclass
class BuildResult:
    app_id: str
    outcome: BuildOutcome
    service: Optional[ComposeService] = None


def build_environment(app_def: AppDefinition, selection: AppSelection) -> Dict[str, str]:
    """Layer the environment: timezone, identity, registry env, then user env."""
    environment: Dict[str, str] = {"TZ": TIMEZONE_VAR}

    if app_def.puid > 0 or app_def.pgid > 0 or app_def.id in IDENTITY_ENV_APPS:
        environment["PUID"] = PUID_VAR
        environment["PGID"] = PGID_VAR
        environment["UMASK"] = UMASK_VAR

    environment.update(app_def.environment)
    environment.update(selection.custom_env)
    return environment


def build_ports(app_def: AppDefinition, selection: AppSelection) -> List[str]:
    """Return ``published:container`` mappings.

    The published side honours the user's override, the container side is
    always the registry default port.
    """
    if app_def.id == HOST_NETWORK_APP:
        return []

    published = selection.port if selection.port is not None else app_def.default_port
    if published == 0 or app_def.default_port == 0:
        return []
    return [f"{published}:{app_def.default_port}"]


def resolve_dependencies(
    app_def: AppDefinition,
    settings: GlobalSettings,
    registry: Optional[Mapping[str, AppDefinition]] = None,
) -> List[str]:
    """Keep the dependencies that will be emitted: enabled and known to the registry."""
    apps = APPS if registry is None else registry
    return [dep for dep in app_def.depends_on if dep in apps and settings.is_enabled(dep)]


def build_service(
    app_def: AppDefinition,
    selection: AppSelection,
    settings: GlobalSettings,
    registry: Optional[Mapping[str, AppDefinition]] = None,
) -> ComposeService:
    volumes = [*app_def.volumes(ROOT_DIR_VAR), *selection.custom_volumes]

    service = ComposeService(
        image=app_def.image,
        container_name=app_def.id,
        environment=build_environment(app_def, selection),
        volumes=volumes,
        ports=build_ports(app_def, selection),
        restart=RESTART_POLICY,
    )

    if app_def.devices:
        service.devices = list(app_def.devices)
    if app_def.cap_add:
        service.cap_add = list(app_def.cap_add)

    if app_def.id == HOST_NETWORK_APP:
        service.network_mode = "host"

    dependencies = resolve_dependencies(app_def, settings, registry)
    if dependencies:
        service.depends_on = dependencies

    labels: List[str] = []
    if proxy_labels_applicable(app_def.id, settings):
        labels.extend(build_proxy_labels(app_def.id, app_def.default_port, settings.reverse_proxy))
    if app_def.id == "huntarr":
        labels.extend(build_huntarr_widget_labels(settings, app_def.default_port))
    if labels:
        service.labels = labels

    return service


def resolve_selection(
    selection: AppSelection,
    settings: GlobalSettings,
    registry: Optional[Mapping[str, AppDefinition]] = None,
) -> BuildResult:
    """Build ``selection`` or report why it was skipped."""
    if not selection.enabled:
        return BuildResult(selection.id, BuildOutcome.SKIPPED_DISABLED)

    apps = APPS if registry is None else registry
    app_def = apps.get(selection.id)
    if app_def is None:
        logger.info("Skipping unknown app %r", selection.id)
        return BuildResult(selection.id, BuildOutcome.SKIPPED_UNKNOWN_APP)

    logger.debug("Building service: %s", selection.id)
    service = build_service(app_def, selection, settings, apps)
    return BuildResult(selection.id, BuildOutcome.BUILT, service)
