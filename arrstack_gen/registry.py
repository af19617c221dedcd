"""Built-in catalog of supported self-hosted applications.

Each entry is an immutable :class:`AppDefinition`. Volume templates take the
root directory (``${ROOT_DIR}`` when generating compose files) and return the
bind mounts for the container.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .arch import get_arch_warning, get_system_arch, is_app_compatible
from .models import AppCategory, AppDefinition, AppSecret, ArchCompatibility, Architecture

MEDIA = AppCategory.MEDIA_MANAGER
INDEXER = AppCategory.INDEXER
DOWNLOADER = AppCategory.DOWNLOADER
SERVER = AppCategory.MEDIA_SERVER
REQUEST = AppCategory.REQUEST_MANAGER
DASHBOARD = AppCategory.DASHBOARD
UTILITY = AppCategory.UTILITY
VPN = AppCategory.VPN
MONITORING = AppCategory.MONITORING
INFRA = AppCategory.INFRASTRUCTURE

DOCKER_SOCKET = "/var/run/docker.sock:/var/run/docker.sock"
DOCKER_SOCKET_RO = "/var/run/docker.sock:/var/run/docker.sock:ro"
TUN_DEVICE = "/dev/net/tun:/dev/net/tun"

_POSTGRES_SECRETS = [
    AppSecret(name="POSTGRESQL_USERNAME", description="PostgreSQL Username", required=True, default="postgres"),
    AppSecret(name="POSTGRESQL_PASSWORD", description="PostgreSQL Password", required=True, mask=True),
]

_AUTHENTIK_ENV = {
    "AUTHENTIK_REDIS__HOST": "valkey",
    "AUTHENTIK_POSTGRESQL__HOST": "postgresql",
    "AUTHENTIK_POSTGRESQL__NAME": "authentik",
    "AUTHENTIK_POSTGRESQL__USER": "${POSTGRESQL_USERNAME}",
    "AUTHENTIK_POSTGRESQL__PASSWORD": "${POSTGRESQL_PASSWORD}",
    "AUTHENTIK_SECRET_KEY": "${AUTHENTIK_SECRET_KEY}",
}


def _config_and_data(app_id: str):
    return lambda root: [f"{root}/config/{app_id}:/config", f"{root}/data:/data"]


def _config_and_media(app_id: str):
    return lambda root: [f"{root}/config/{app_id}:/config", f"{root}/data/media:/data/media"]


def _config_only(app_id: str, target: str = "/config"):
    return lambda root: [f"{root}/config/{app_id}:{target}"]


_DEFINITIONS: List[AppDefinition] = [
    # Media management
    AppDefinition(
        id="radarr",
        name="Radarr",
        description="Movie collection manager",
        category=MEDIA,
        default_port=7878,
        image="lscr.io/linuxserver/radarr:latest",
        puid=13002,
        pgid=13000,
        volumes=_config_and_data("radarr"),
    ),
    AppDefinition(
        id="sonarr",
        name="Sonarr",
        description="TV series collection manager",
        category=MEDIA,
        default_port=8989,
        image="lscr.io/linuxserver/sonarr:latest",
        puid=13001,
        pgid=13000,
        volumes=_config_and_data("sonarr"),
    ),
    AppDefinition(
        id="lidarr",
        name="Lidarr",
        description="Music collection manager",
        category=MEDIA,
        default_port=8686,
        image="lscr.io/linuxserver/lidarr:latest",
        puid=13003,
        pgid=13000,
        volumes=_config_and_data("lidarr"),
    ),
    AppDefinition(
        id="readarr",
        name="Readarr",
        description="Book collection manager",
        category=MEDIA,
        default_port=8787,
        image="lscr.io/linuxserver/readarr:develop",
        puid=13004,
        pgid=13000,
        volumes=_config_and_data("readarr"),
        arch=ArchCompatibility(
            deprecated=[Architecture.ARM64, Architecture.ARM32],
            warning="Readarr is deprecated - no ARM64 support (project abandoned by upstream)",
        ),
    ),
    AppDefinition(
        id="bazarr",
        name="Bazarr",
        description="Subtitle manager for Sonarr/Radarr",
        category=MEDIA,
        default_port=6767,
        image="lscr.io/linuxserver/bazarr:latest",
        puid=13013,
        pgid=13000,
        volumes=_config_and_media("bazarr"),
        depends_on=["sonarr", "radarr"],
    ),
    AppDefinition(
        id="mylar3",
        name="Mylar3",
        description="Comic book collection manager",
        category=MEDIA,
        default_port=8090,
        image="lscr.io/linuxserver/mylar3:latest",
        puid=13005,
        pgid=13000,
        volumes=_config_and_data("mylar3"),
    ),
    AppDefinition(
        id="whisparr",
        name="Whisparr",
        description="Adult media collection manager",
        category=MEDIA,
        default_port=6969,
        image="ghcr.io/hotio/whisparr:nightly",
        puid=13015,
        pgid=13000,
        volumes=_config_and_data("whisparr"),
    ),
    AppDefinition(
        id="audiobookshelf",
        name="Audiobookshelf",
        description="Audiobook and podcast server",
        category=MEDIA,
        default_port=13378,
        image="ghcr.io/advplyr/audiobookshelf:latest",
        puid=13014,
        pgid=13000,
        volumes=lambda root: [
            f"{root}/config/audiobookshelf:/config",
            f"{root}/data/media/audiobooks:/audiobooks",
            f"{root}/data/media/podcasts:/podcasts",
            f"{root}/data/media/audiobookshelf-metadata:/metadata",
        ],
    ),
    # Indexers
    AppDefinition(
        id="prowlarr",
        name="Prowlarr",
        description="Indexer manager for *arr apps",
        category=INDEXER,
        default_port=9696,
        image="lscr.io/linuxserver/prowlarr:develop",
        puid=13006,
        pgid=13000,
        volumes=_config_only("prowlarr"),
    ),
    AppDefinition(
        id="jackett",
        name="Jackett",
        description="Alternative indexer manager",
        category=INDEXER,
        default_port=9117,
        image="lscr.io/linuxserver/jackett:latest",
        puid=13008,
        pgid=13000,
        volumes=_config_only("jackett"),
    ),
    AppDefinition(
        id="flaresolverr",
        name="FlareSolverr",
        description="Cloudflare bypass proxy",
        category=INDEXER,
        default_port=8191,
        image="ghcr.io/flaresolverr/flaresolverr:latest",
        volumes=lambda root: [],
        environment={"LOG_LEVEL": "info", "LOG_HTML": "false", "CAPTCHA_SOLVER": "none"},
    ),
    # Download clients
    AppDefinition(
        id="qbittorrent",
        name="qBittorrent",
        description="BitTorrent client",
        category=DOWNLOADER,
        default_port=8080,
        image="lscr.io/linuxserver/qbittorrent:latest",
        puid=13007,
        pgid=13000,
        volumes=_config_and_data("qbittorrent"),
        environment={"WEBUI_PORT": "8080"},
        secrets=[
            AppSecret(name="QBITTORRENT_USER", description="Username for qBittorrent WebUI", default="admin"),
            AppSecret(name="QBITTORRENT_PASSWORD", description="Password for qBittorrent WebUI", mask=True),
        ],
    ),
    AppDefinition(
        id="sabnzbd",
        name="SABnzbd",
        description="Usenet downloader",
        category=DOWNLOADER,
        default_port=8081,
        image="lscr.io/linuxserver/sabnzbd:latest",
        puid=13011,
        pgid=13000,
        volumes=_config_and_data("sabnzbd"),
    ),
    # Media servers
    AppDefinition(
        id="plex",
        name="Plex",
        description="Media server with streaming",
        category=SERVER,
        default_port=32400,
        image="lscr.io/linuxserver/plex:latest",
        puid=13010,
        pgid=13000,
        volumes=_config_and_media("plex"),
        environment={"VERSION": "docker"},
    ),
    AppDefinition(
        id="jellyfin",
        name="Jellyfin",
        description="Free open-source media server",
        category=SERVER,
        default_port=8096,
        image="lscr.io/linuxserver/jellyfin:latest",
        pgid=13000,
        volumes=_config_and_media("jellyfin"),
    ),
    AppDefinition(
        id="tautulli",
        name="Tautulli",
        description="Plex monitoring and statistics",
        category=SERVER,
        default_port=8181,
        image="lscr.io/linuxserver/tautulli:latest",
        pgid=13000,
        volumes=_config_only("tautulli"),
        depends_on=["plex"],
    ),
    AppDefinition(
        id="tdarr",
        name="Tdarr",
        description="Audio/video transcoding automation",
        category=SERVER,
        default_port=8265,
        image="ghcr.io/haveagitgat/tdarr:latest",
        pgid=13000,
        volumes=lambda root: [
            f"{root}/config/tdarr/server:/app/server",
            f"{root}/config/tdarr/configs:/app/configs",
            f"{root}/config/tdarr/logs:/app/logs",
            f"{root}/data/media:/data",
        ],
        environment={"serverIP": "0.0.0.0", "internalNode": "true"},
    ),
    # Request management
    AppDefinition(
        id="overseerr",
        name="Overseerr",
        description="Request management for Plex",
        category=REQUEST,
        default_port=5055,
        image="sctx/overseerr:latest",
        puid=13009,
        pgid=13000,
        volumes=_config_only("overseerr", "/app/config"),
        depends_on=["plex"],
    ),
    AppDefinition(
        id="jellyseerr",
        name="Jellyseerr",
        description="Request management for Jellyfin",
        category=REQUEST,
        default_port=5056,
        image="fallenbagel/jellyseerr:latest",
        puid=13012,
        pgid=13000,
        volumes=_config_only("jellyseerr", "/app/config"),
        depends_on=["jellyfin"],
    ),
    # Dashboards
    AppDefinition(
        id="homarr",
        name="Homarr",
        description="Modern dashboard for all services",
        category=DASHBOARD,
        default_port=7575,
        image="ghcr.io/ajnart/homarr:latest",
        volumes=lambda root: [
            f"{root}/config/homarr/configs:/app/data/configs",
            f"{root}/config/homarr/icons:/app/public/icons",
            f"{root}/config/homarr/data:/data",
            DOCKER_SOCKET,
        ],
    ),
    AppDefinition(
        id="heimdall",
        name="Heimdall",
        description="Application dashboard and launcher",
        category=DASHBOARD,
        default_port=8082,
        image="lscr.io/linuxserver/heimdall:latest",
        pgid=13000,
        volumes=_config_only("heimdall"),
    ),
    AppDefinition(
        id="homepage",
        name="Homepage",
        description="Highly customizable application dashboard",
        category=DASHBOARD,
        default_port=3000,
        image="ghcr.io/gethomepage/homepage:latest",
        volumes=lambda root: [f"{root}/config/homepage:/app/config", DOCKER_SOCKET],
    ),
    # Utilities
    AppDefinition(
        id="portainer",
        name="Portainer",
        description="Docker container management UI",
        category=UTILITY,
        default_port=9000,
        image="portainer/portainer-ce:latest",
        volumes=lambda root: [f"{root}/config/portainer:/data", DOCKER_SOCKET],
    ),
    AppDefinition(
        id="huntarr",
        name="Huntarr",
        description="Missing content manager for *arr apps",
        category=UTILITY,
        default_port=9705,
        image="huntarr/huntarr:latest",
        pgid=13000,
        volumes=_config_only("huntarr"),
    ),
    AppDefinition(
        id="unpackerr",
        name="Unpackerr",
        description="Archive extraction for *arr apps",
        category=UTILITY,
        default_port=5656,
        image="golift/unpackerr",
        pgid=13000,
        volumes=_config_and_data("unpackerr"),
    ),
    AppDefinition(
        id="filebot",
        name="FileBot",
        description="Media file renaming and automator",
        category=UTILITY,
        default_port=5452,
        image="rednoah/filebot",
        puid=13000,
        pgid=13000,
        volumes=lambda root: [f"{root}/config/filebot:/data", f"{root}/data:/data"],
        environment={"DARK_MODE": "1"},
    ),
    AppDefinition(
        id="chromium",
        name="Chromium",
        description="Web browser for secure remote browsing",
        category=UTILITY,
        default_port=3000,
        image="lscr.io/linuxserver/chromium:latest",
        puid=13000,
        pgid=13000,
        volumes=_config_only("chromium"),
        environment={"TITLE": "Chromium"},
    ),
    AppDefinition(
        id="guacamole",
        name="Guacamole",
        description="Clientless remote desktop gateway",
        category=UTILITY,
        default_port=8080,
        image="guacamole/guacamole",
        volumes=_config_only("guacamole"),
        environment={
            "WEBAPP_CONTEXT": "ROOT",
            "GUACD_HOSTNAME": "guacd",
            "POSTGRESQL_HOSTNAME": "postgresql",
            "POSTGRESQL_DATABASE": "guacamole",
            "POSTGRESQL_USER": "${POSTGRESQL_USERNAME}",
            "POSTGRESQL_PASSWORD": "${POSTGRESQL_PASSWORD}",
        },
        depends_on=["guacd", "postgresql"],
        secrets=_POSTGRES_SECRETS,
    ),
    AppDefinition(
        id="guacd",
        name="Guacd",
        description="Guacamole proxy daemon",
        category=UTILITY,
        default_port=4822,
        image="guacamole/guacd",
        pgid=13000,
        volumes=_config_only("guacd"),
        depends_on=["postgresql"],
    ),
    AppDefinition(
        id="ddns-updater",
        name="DDNS-Updater",
        description="Dynamic DNS record updater",
        category=UTILITY,
        default_port=8000,
        image="qmcgaw/ddns-updater",
        puid=13000,
        pgid=13000,
        volumes=_config_only("ddns-updater", "/data"),
    ),
    # VPN
    AppDefinition(
        id="gluetun",
        name="Gluetun",
        description="VPN client container for routing traffic",
        category=VPN,
        default_port=8888,
        image="qmcgaw/gluetun:latest",
        volumes=_config_only("gluetun", "/gluetun"),
        environment={
            "VPN_SERVICE_PROVIDER": "${VPN_SERVICE_PROVIDER}",
            "OPENVPN_USER": "${VPN_USERNAME}",
            "OPENVPN_PASSWORD": "${VPN_PASSWORD}",
            "WIREGUARD_PRIVATE_KEY": "${WIREGUARD_PRIVATE_KEY}",
            "HTTPPROXY": "on",
            "SHADOWSOCKS": "on",
        },
        devices=[TUN_DEVICE],
        cap_add=["NET_ADMIN"],
        secrets=[
            AppSecret(
                name="VPN_SERVICE_PROVIDER",
                description="VPN Provider (e.g. custom, airvpn)",
                required=True,
                default="custom",
            ),
            AppSecret(name="VPN_USERNAME", description="OpenVPN Username"),
            AppSecret(name="VPN_PASSWORD", description="OpenVPN Password", mask=True),
            AppSecret(name="WIREGUARD_PRIVATE_KEY", description="WireGuard Private Key", mask=True),
        ],
    ),
    # Monitoring
    AppDefinition(
        id="grafana",
        name="Grafana",
        description="Visual monitoring dashboard",
        category=MONITORING,
        default_port=3001,
        image="grafana/grafana-enterprise",
        pgid=13000,
        volumes=_config_only("grafana", "/var/lib/grafana"),
    ),
    AppDefinition(
        id="prometheus",
        name="Prometheus",
        description="Systems and service monitoring",
        category=MONITORING,
        default_port=9090,
        image="prom/prometheus",
        pgid=13000,
        volumes=_config_only("prometheus", "/prometheus"),
    ),
    AppDefinition(
        id="dozzle",
        name="Dozzle",
        description="Real-time log viewer for Docker containers",
        category=MONITORING,
        default_port=8888,
        image="amir20/dozzle",
        volumes=lambda root: [DOCKER_SOCKET],
    ),
    AppDefinition(
        id="uptime-kuma",
        name="Uptime Kuma",
        description="Self-hosted monitoring tool",
        category=MONITORING,
        default_port=3001,
        image="louislam/uptime-kuma:1",
        volumes=lambda root: [f"{root}/config/uptime-kuma:/app/data", DOCKER_SOCKET],
    ),
    # Infrastructure
    AppDefinition(
        id="traefik",
        name="Traefik",
        description="Reverse proxy and load balancer",
        category=INFRA,
        default_port=8083,
        image="traefik:latest",
        volumes=lambda root: [
            f"{root}/config/traefik:/etc/traefik",
            f"{root}/config/traefik/letsencrypt:/letsencrypt",
            DOCKER_SOCKET_RO,
        ],
        secrets=[
            AppSecret(
                name="CLOUDFLARE_DNS_API_TOKEN",
                description="Cloudflare DNS API Token for Traefik",
                mask=True,
            ),
            AppSecret(name="CLOUDFLARE_DNS_ZONE", description="Root Domain (e.g. example.com)", required=True),
        ],
    ),
    AppDefinition(
        id="traefik-certs-dumper",
        name="Traefik Certs Dumper",
        description="Extracts certificates from Traefik",
        category=INFRA,
        default_port=0,
        image="ldez/traefik-certs-dumper:latest",
        volumes=lambda root: [
            f"{root}/config/traefik/letsencrypt:/traefik:ro",
            f"{root}/config/traefik/certs:/output",
        ],
        depends_on=["traefik"],
    ),
    AppDefinition(
        id="crowdsec",
        name="CrowdSec",
        description="Intrusion prevention system",
        category=INFRA,
        default_port=8080,
        image="crowdsecurity/crowdsec:latest",
        volumes=lambda root: [f"{root}/config/crowdsec:/etc/crowdsec", DOCKER_SOCKET_RO],
    ),
    AppDefinition(
        id="headscale",
        name="Headscale",
        description="Open-source Tailscale control server",
        category=INFRA,
        default_port=8084,
        image="headscale/headscale:latest",
        volumes=lambda root: [
            f"{root}/config/headscale:/etc/headscale",
            f"{root}/config/headscale/data:/var/lib/headscale",
        ],
    ),
    AppDefinition(
        id="headplane",
        name="Headplane",
        description="Headscale web UI",
        category=INFRA,
        default_port=3000,
        image="ghcr.io/tale/headplane:latest",
        volumes=_config_only("headplane"),
        depends_on=["headscale"],
    ),
    AppDefinition(
        id="tailscale",
        name="Tailscale",
        description="VPN mesh network client",
        category=INFRA,
        default_port=0,
        image="tailscale/tailscale:latest",
        volumes=_config_only("tailscale", "/var/lib/tailscale"),
        devices=[TUN_DEVICE],
        cap_add=["NET_ADMIN"],
        secrets=[AppSecret(name="TAILSCALE_AUTHKEY", description="Tailscale Auth Key", required=True, mask=True)],
    ),
    AppDefinition(
        id="authentik",
        name="Authentik",
        description="Identity provider and SSO (Server)",
        category=INFRA,
        default_port=9001,
        image="ghcr.io/goauthentik/server:latest",
        pgid=13000,
        volumes=lambda root: [
            f"{root}/config/authentik/media:/media",
            f"{root}/config/authentik/templates:/templates",
        ],
        environment=_AUTHENTIK_ENV,
        depends_on=["postgresql", "valkey", "authentik-worker"],
        secrets=[
            AppSecret(
                name="AUTHENTIK_SECRET_KEY",
                description="Authentik Secret Key",
                required=True,
                mask=True,
                generate=True,
            ),
            *_POSTGRES_SECRETS,
        ],
    ),
    AppDefinition(
        id="authentik-worker",
        name="Authentik Worker",
        description="Identity provider background worker",
        category=INFRA,
        default_port=0,
        image="ghcr.io/goauthentik/server:latest",
        pgid=13000,
        volumes=lambda root: [
            f"{root}/config/authentik/media:/media",
            f"{root}/config/authentik/templates:/templates",
            f"{root}/config/authentik/certs:/certs",
            DOCKER_SOCKET,
        ],
        environment=_AUTHENTIK_ENV,
        depends_on=["postgresql", "valkey"],
    ),
    AppDefinition(
        id="postgresql",
        name="PostgreSQL",
        description="Database server",
        category=INFRA,
        default_port=5432,
        image="docker.io/library/postgres:latest",
        pgid=13000,
        volumes=_config_only("postgresql", "/var/lib/postgresql/data"),
        environment={
            "POSTGRES_USER": "${POSTGRESQL_USERNAME}",
            "POSTGRES_PASSWORD": "${POSTGRESQL_PASSWORD}",
            "POSTGRES_DB": "authentik",
        },
        secrets=_POSTGRES_SECRETS,
    ),
    AppDefinition(
        id="valkey",
        name="Valkey",
        description="Redis-compatible key-value store",
        category=INFRA,
        default_port=6379,
        image="valkey/valkey:alpine",
        pgid=13000,
        volumes=_config_only("valkey", "/data"),
    ),
]

APPS: Mapping[str, AppDefinition] = MappingProxyType({app.id: app for app in _DEFINITIONS})


def get_app(app_id: str) -> Optional[AppDefinition]:
    return APPS.get(app_id)


def get_all_apps() -> List[AppDefinition]:
    return list(APPS.values())


def get_app_ids() -> List[str]:
    return list(APPS.keys())


def get_apps_by_category() -> Dict[AppCategory, List[AppDefinition]]:
    result: Dict[AppCategory, List[AppDefinition]] = {}
    for app in APPS.values():
        result.setdefault(app.category, []).append(app)
    return result


def get_compatible_apps(arch: Optional[Architecture] = None) -> List[AppDefinition]:
    system_arch = arch or get_system_arch()
    return [app for app in APPS.values() if is_app_compatible(app, system_arch)]


def get_apps_with_arch_warnings(arch: Optional[Architecture] = None) -> List[Tuple[AppDefinition, str]]:
    system_arch = arch or get_system_arch()
    result: List[Tuple[AppDefinition, str]] = []
    for app in APPS.values():
        warning = get_arch_warning(app, system_arch)
        if warning:
            result.append((app, warning))
    return result
