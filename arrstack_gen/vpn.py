"""Route selected services through the VPN gateway container."""
from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional

from .constants import HOST_NETWORK_APP, VPN_GATEWAY_APP, VPN_ROUTED_CATEGORIES, gateway_network_mode
from .models import AppDefinition, ComposeService, GlobalSettings, VpnMode
from .registry import APPS

logger = logging.getLogger(__name__)


def vpn_routing_active(services: Mapping[str, ComposeService], settings: GlobalSettings) -> bool:
    vpn = settings.vpn
    if vpn is None or vpn.mode == VpnMode.NONE:
        return False
    return VPN_GATEWAY_APP in services


def route_through_vpn(
    services: Dict[str, ComposeService],
    settings: GlobalSettings,
    registry: Optional[Mapping[str, AppDefinition]] = None,
) -> Dict[str, ComposeService]:
    """Move eligible services behind the gateway, mutating ``services``.

    Eligible services lose their published ports and join the gateway's
    network namespace; the gateway publishes the union of those ports.
    Running it again on routed services changes nothing.
    """
    if not vpn_routing_active(services, settings):
        return services

    apps = APPS if registry is None else registry
    routed_categories = VPN_ROUTED_CATEGORIES[settings.vpn.mode]
    network_mode = gateway_network_mode(VPN_GATEWAY_APP)
    moved_ports: List[str] = []

    for name, service in services.items():
        if name in (VPN_GATEWAY_APP, HOST_NETWORK_APP):
            continue
        app_def = apps.get(name)
        if app_def is None or app_def.category not in routed_categories:
            continue

        if service.ports:
            moved_ports.extend(service.ports)
            service.ports = []
        service.network_mode = network_mode
        logger.debug("Routing %s through %s", name, VPN_GATEWAY_APP)

    if moved_ports:
        gateway = services[VPN_GATEWAY_APP]
        gateway.ports = list(dict.fromkeys([*gateway.ports, *moved_ports]))
    return services
