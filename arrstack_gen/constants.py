"""Shared constants and small helpers for compose generation."""

from __future__ import annotations

from typing import Dict, FrozenSet

from .models import AppCategory, VpnMode

# Substitution markers resolved by the compose runner from the .env store.
ROOT_DIR_VAR = "${ROOT_DIR}"
TIMEZONE_VAR = "${TIMEZONE}"
PUID_VAR = "${PUID}"
PGID_VAR = "${PGID}"
UMASK_VAR = "${UMASK}"

RESTART_POLICY = "unless-stopped"

HOST_NETWORK_APP = "plex"
VPN_GATEWAY_APP = "gluetun"
REVERSE_PROXY_APP = "traefik"

# Apps running with puid == 0 that still expect PUID/PGID/UMASK.
IDENTITY_ENV_APPS: FrozenSet[str] = frozenset({"jellyfin", "tautulli"})

VPN_ROUTED_CATEGORIES: Dict[VpnMode, FrozenSet[AppCategory]] = {
    VpnMode.MINI: frozenset({AppCategory.DOWNLOADER}),
    VpnMode.FULL: frozenset(
        {
            AppCategory.DOWNLOADER,
            AppCategory.INDEXER,
            AppCategory.REQUEST_MANAGER,
            AppCategory.MEDIA_SERVER,
            AppCategory.MEDIA_MANAGER,
        }
    ),
    VpnMode.NONE: frozenset(),
}

ENV_ROOT_DIR = "ROOT_DIR"
ENV_TIMEZONE = "TIMEZONE"
ENV_PUID = "PUID"
ENV_PGID = "PGID"
ENV_UMASK = "UMASK"

COMPOSE_FILE_NAME = "docker-compose.yml"
ENV_FILE_NAME = ".env"


def gateway_network_mode(gateway: str = VPN_GATEWAY_APP) -> str:
    """Return the network_mode value that joins ``gateway``'s namespace."""
    return f"service:{gateway}"
