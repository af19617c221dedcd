"""Traefik and Homepage docker label synthesis."""
from __future__ import annotations

from typing import List

from .constants import HOST_NETWORK_APP, REVERSE_PROXY_APP
from .models import GlobalSettings, ReverseProxySettings

# *arr apps Huntarr reports a next cycle for, in widget order.
HUNTARR_TRACKED_APPS = ["radarr", "sonarr", "lidarr", "whisparr", "readarr"]


def proxy_labels_applicable(app_id: str, settings: GlobalSettings) -> bool:
    """Return True when ``app_id`` should be exposed through the reverse proxy.

    The proxy itself and the host-networked media server are never labelled.
    """
    proxy = settings.reverse_proxy
    if proxy is None or not proxy.enabled:
        return False
    return app_id not in (REVERSE_PROXY_APP, HOST_NETWORK_APP)


def build_proxy_labels(app_id: str, container_port: int, proxy: ReverseProxySettings) -> List[str]:
    """Return Traefik labels routing ``<app_id>.<domain>`` to the container.

    ``container_port`` is the app's registry default port, never the published
    override: Traefik talks to the container on the docker network.
    """
    router = f"traefik.http.routers.{app_id}"
    labels = [
        "traefik.enable=true",
        f"{router}.service={app_id}",
        f"{router}.rule=Host(`{app_id}.{proxy.domain}`)",
        f"{router}.entrypoints={proxy.entrypoint}",
    ]

    if proxy.middlewares:
        labels.append(f"{router}.middlewares={','.join(proxy.middlewares)}")

    balancer = f"traefik.http.services.{app_id}.loadbalancer.server"
    labels.extend(
        [
            f"{balancer}.scheme=http",
            f"{balancer}.port={container_port}",
        ]
    )
    return labels


def build_huntarr_widget_labels(settings: GlobalSettings, port: int) -> List[str]:
    """Homepage autodiscovery labels for Huntarr's cycle status widget."""
    labels = [
        "homepage.group=Utilities",
        "homepage.name=Huntarr",
        "homepage.icon=huntarr.png",
        "homepage.description=Missing content manager for *arr apps",
        "homepage.widget.type=customapi",
        "homepage.widget.method=GET",
        f"homepage.widget.url=http://huntarr:{port}/api/cycle/status",
    ]

    tracked = [app_id for app_id in HUNTARR_TRACKED_APPS if settings.is_enabled(app_id)]
    for index, app_id in enumerate(tracked):
        mapping = f"homepage.widget.mappings[{index}]"
        labels.extend(
            [
                f"{mapping}.label={app_id.capitalize()}",
                f"{mapping}.field={app_id}.next_cycle",
                f"{mapping}.format=relativeDate",
            ]
        )
    return labels
