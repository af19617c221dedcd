"""CPU architecture detection and per-app compatibility checks."""
from __future__ import annotations

import platform
from typing import Optional

from .models import AppDefinition, Architecture

_MACHINE_ALIASES = {
    "x86_64": Architecture.X64,
    "amd64": Architecture.X64,
    "i386": Architecture.X64,
    "i686": Architecture.X64,
    "aarch64": Architecture.ARM64,
    "arm64": Architecture.ARM64,
    "armv7l": Architecture.ARM32,
    "armv6l": Architecture.ARM32,
    "arm": Architecture.ARM32,
}


def get_system_arch(machine: Optional[str] = None) -> Architecture:
    """Map ``platform.machine()`` onto the registry's architecture names.

    Unknown machines are treated as x64.
    """
    name = (machine if machine is not None else platform.machine()).strip().lower()
    return _MACHINE_ALIASES.get(name, Architecture.X64)


def is_app_compatible(app: AppDefinition, arch: Optional[Architecture] = None) -> bool:
    system_arch = arch or get_system_arch()
    if app.arch is None:
        return True
    if system_arch in app.arch.deprecated:
        return False
    if app.arch.supported is not None and system_arch not in app.arch.supported:
        return False
    return True


def is_app_deprecated(app: AppDefinition, arch: Optional[Architecture] = None) -> bool:
    system_arch = arch or get_system_arch()
    return app.arch is not None and system_arch in app.arch.deprecated


def get_arch_warning(app: AppDefinition, arch: Optional[Architecture] = None) -> Optional[str]:
    """Return a user-facing warning for ``app`` on ``arch``, or ``None``."""
    system_arch = arch or get_system_arch()
    if app.arch is None:
        return None

    if system_arch in app.arch.deprecated:
        return app.arch.warning or f"{app.name} has deprecated support for {system_arch.value}"

    if app.arch.supported is not None and system_arch not in app.arch.supported:
        return f"{app.name} does not support {system_arch.value} architecture"

    return None
