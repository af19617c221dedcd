"""Render compose services into docker-compose YAML."""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml
from yaml.representer import SafeRepresenter

from .models import ComposeService

logger = logging.getLogger(__name__)


class QuotedStr(str):
    """A string that must be rendered with double quotes in YAML."""


class _ComposeYamlDumper(yaml.SafeDumper):
    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:  # type: ignore[override]
        # PyYAML defaults to "indentless" sequences under mappings, producing:
        #   key:
        #   - item
        # Force indentation so it becomes:
        #   key:
        #     - item
        return super().increase_indent(flow, False)


def _represent_quoted_str(dumper: yaml.SafeDumper, data: QuotedStr) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:str", str(data), style='"')


_ComposeYamlDumper.add_representer(QuotedStr, _represent_quoted_str)


def _represent_multiline_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data or "\r" in data:
        normalized = data.replace("\r\n", "\n").replace("\r", "\n")
        return dumper.represent_scalar("tag:yaml.org,2002:str", normalized, style="|")
    return SafeRepresenter.represent_str(dumper, data)


_ComposeYamlDumper.add_representer(str, _represent_multiline_str)


def service_to_dict(service: ComposeService) -> Dict[str, Any]:
    """Return the compose mapping for one service, dropping empty fields.

    Port mappings are always double quoted; short mappings such as ``22:22`` would
    otherwise be read as base-60 integers by YAML 1.1 parsers. A service with a
    network_mode never publishes ports.
    """
    data: Dict[str, Any] = {
        "image": service.image,
        "container_name": service.container_name,
    }
    if service.network_mode:
        data["network_mode"] = service.network_mode
    if service.depends_on:
        data["depends_on"] = list(service.depends_on)
    if service.environment:
        data["environment"] = [f"{key}={value}" for key, value in service.environment.items()]
    if service.volumes:
        data["volumes"] = list(service.volumes)
    if service.ports and not service.network_mode:
        data["ports"] = [QuotedStr(port) for port in service.ports]
    if service.labels:
        data["labels"] = list(service.labels)
    if service.devices:
        data["devices"] = list(service.devices)
    if service.cap_add:
        data["cap_add"] = list(service.cap_add)
    data["restart"] = service.restart
    return data


def dump_yaml(data: Any) -> str:
    """Serialize data into YAML with compose-friendly indentation."""
    return yaml.dump(
        data,
        Dumper=_ComposeYamlDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        explicit_start=True,
        width=4096,
    )


def serialize_services(services: Mapping[str, ComposeService]) -> str:
    """Render ``services`` in insertion order under a top-level ``services:`` key."""
    document = {"services": {name: service_to_dict(service) for name, service in services.items()}}
    return dump_yaml(document)


def write_compose_file(yaml_text: str, path: Path) -> None:
    """Atomically replace ``path`` with ``yaml_text``.

    The text goes to a temporary file in the same directory first, so a failed
    write never leaves a truncated compose file behind.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(yaml_text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.info("Compose file written to %s", path)

