"""Pydantic data models shared across the compose generator."""
from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AppCategory(str, Enum):
    MEDIA_MANAGER = "media-manager"
    INDEXER = "indexer"
    DOWNLOADER = "downloader"
    MEDIA_SERVER = "media-server"
    REQUEST_MANAGER = "request-manager"
    DASHBOARD = "dashboard"
    UTILITY = "utility"
    VPN = "vpn"
    MONITORING = "monitoring"
    INFRASTRUCTURE = "infrastructure"


CATEGORY_TITLES: Dict[AppCategory, str] = {
    AppCategory.MEDIA_MANAGER: "Media Management",
    AppCategory.INDEXER: "Indexers",
    AppCategory.DOWNLOADER: "Download Clients",
    AppCategory.MEDIA_SERVER: "Media Servers",
    AppCategory.REQUEST_MANAGER: "Request Management",
    AppCategory.DASHBOARD: "Dashboards",
    AppCategory.UTILITY: "Utilities",
    AppCategory.VPN: "VPN",
    AppCategory.MONITORING: "Monitoring",
    AppCategory.INFRASTRUCTURE: "Infrastructure",
}


class Architecture(str, Enum):
    X64 = "x64"
    ARM64 = "arm64"
    ARM32 = "arm32"


class ArchCompatibility(BaseModel):
    model_config = ConfigDict(frozen=True)

    supported: Optional[List[Architecture]] = None
    deprecated: List[Architecture] = Field(default_factory=list)
    warning: str = ""


class AppSecret(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    required: bool = False
    default: Optional[str] = None
    generate: bool = False
    mask: bool = False


class AppDefinition(BaseModel):
    """One immutable registry entry.

    ``volumes`` is a template: it receives the root directory (normally the
    ``${ROOT_DIR}`` marker) and returns the bind mounts in order.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    category: AppCategory
    default_port: int
    image: str
    puid: int = 0
    pgid: int = 0
    volumes: Callable[[str], List[str]]
    environment: Dict[str, str] = Field(default_factory=dict)
    depends_on: List[str] = Field(default_factory=list)
    secrets: List[AppSecret] = Field(default_factory=list)
    devices: List[str] = Field(default_factory=list)
    cap_add: List[str] = Field(default_factory=list)
    arch: Optional[ArchCompatibility] = None


class AppSelection(BaseModel):
    """A user's choice for a single app.

    Devices, capabilities and labels are kept here for the UI but the service
    builder does not merge them into the registry defaults.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    enabled: bool = False
    port: Optional[int] = None
    custom_env: Dict[str, str] = Field(default_factory=dict, alias="customEnv")
    custom_volumes: List[str] = Field(default_factory=list, alias="customVolumes")
    labels: List[str] = Field(default_factory=list)
    devices: List[str] = Field(default_factory=list)
    cap_add: List[str] = Field(default_factory=list)


class VpnMode(str, Enum):
    FULL = "full"
    MINI = "mini"
    NONE = "none"


class VpnSettings(BaseModel):
    mode: VpnMode = VpnMode.NONE
    provider: Optional[str] = None


class ReverseProxySettings(BaseModel):
    enabled: bool = False
    domain: str = ""
    entrypoint: str = "websecure"
    middlewares: List[str] = Field(default_factory=list)


class GlobalSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    version: str = ""
    root_dir: str = Field("", alias="rootDir")
    timezone: str = "UTC"
    uid: int = Field(1000, ge=0)
    gid: int = Field(1000, ge=0)
    umask: str = "002"
    apps: List[AppSelection] = Field(default_factory=list)
    vpn: Optional[VpnSettings] = None
    reverse_proxy: Optional[ReverseProxySettings] = Field(None, alias="traefik")
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    def enabled_apps(self) -> List[AppSelection]:
        return [app for app in self.apps if app.enabled]

    def is_enabled(self, app_id: str) -> bool:
        return any(app.id == app_id and app.enabled for app in self.apps)

    def to_json(self) -> str:
        """Return the settings in the on-disk (camelCase) JSON layout."""
        return self.model_dump_json(indent=2, by_alias=True)


class ComposeService(BaseModel):
    image: str
    container_name: str
    environment: Dict[str, str] = Field(default_factory=dict)
    volumes: List[str] = Field(default_factory=list)
    ports: List[str] = Field(default_factory=list)
    restart: str = "unless-stopped"
    depends_on: Optional[List[str]] = None
    network_mode: Optional[str] = None
    labels: Optional[List[str]] = None
    devices: Optional[List[str]] = None
    cap_add: Optional[List[str]] = None
