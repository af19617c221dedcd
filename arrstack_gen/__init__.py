"""Docker compose generator for self-hosted media stacks."""

__version__ = "0.1.0"

from .models import (  # noqa: E402
    AppCategory,
    AppDefinition,
    AppSelection,
    ComposeService,
    GlobalSettings,
    ReverseProxySettings,
    VpnMode,
    VpnSettings,
)

__all__ = [
    "AppCategory",
    "AppDefinition",
    "AppSelection",
    "ComposeService",
    "GlobalSettings",
    "ReverseProxySettings",
    "VpnMode",
    "VpnSettings",
    "__version__",
]
