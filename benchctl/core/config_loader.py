"""Bench configuration loading for text and YAML configuration files."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError as SchemaValidationError
from jsonschema import validators

from benchctl.core.errors import ConfigError
from benchctl.core.model import BenchConfig, ProtocolKind

_YAML_SUFFIXES = {".yml", ".yaml"}
_PORTS_PREFIX = "Port Configuration:"
_LIMIT_PREFIXES = {
    "# of sensors:": "max_sensors",
    "# of displays:": "max_displays",
    "# of wireless adapters:": "max_wireless_adapters",
    "# of motor drivers:": "max_motor_drivers",
}
_YAML_LIMIT_KEYS = {
    "sensors": "max_sensors",
    "displays": "max_displays",
    "wireless_adapters": "max_wireless_adapters",
    "motor_drivers": "max_motor_drivers",
}
_INTEGER = re.compile(r"[+-]?[0-9]+")
LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ConfigError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class LoadedConfig:
    config: BenchConfig
    warnings: tuple[str, ...]


def _load_schema_validator() -> Any:
    schema_text = resources.files("benchctl.schemas").joinpath("bench.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Could not read configuration file {path}: {exc}") from exc


def _parse_ports(tokens: list[str], warnings: list[str]) -> tuple[ProtocolKind, ...]:
    ports: list[ProtocolKind] = []
    for raw in tokens:
        token = str(raw).strip()
        if not token:
            continue
        try:
            ports.append(ProtocolKind(token))
        except ValueError:
            warning = f"Unknown protocol in configuration: {token}"
            LOGGER.warning(warning)
            warnings.append(warning)
    return tuple(ports)


def _parse_limit(value: str, *, context: str) -> int:
    value = value.strip()
    if not _INTEGER.fullmatch(value):
        raise ConfigError(f"{context} must be an integer, got '{value}'")
    limit = int(value)
    if limit < 0:
        raise ConfigError(f"{context} must not be negative, got {limit}")
    return limit


def _parse_text(content: str, source: Path) -> LoadedConfig:
    warnings: list[str] = []
    fields: dict[str, Any] = {}

    for line in content.splitlines():
        line = line.strip()
        if line.startswith(_PORTS_PREFIX):
            tokens = line[len(_PORTS_PREFIX):].split(",")
            fields["ports"] = _parse_ports(tokens, warnings)
            continue
        for prefix, field_name in _LIMIT_PREFIXES.items():
            if line.startswith(prefix):
                try:
                    fields[field_name] = _parse_limit(
                        line[len(prefix):],
                        context=f"'{prefix.rstrip(':')}' in {source}",
                    )
                except ConfigError as exc:
                    warning = f"{exc}; using 0"
                    LOGGER.warning(warning)
                    warnings.append(warning)
                break

    return LoadedConfig(config=BenchConfig(**fields), warnings=tuple(warnings))


def _parse_yaml(content: str, source: Path) -> LoadedConfig:
    try:
        doc = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source}: {exc}") from exc

    if doc is None:
        doc = {}
    if not isinstance(doc, dict):
        raise ConfigError(f"Configuration file {source} must contain a mapping at root")

    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except SchemaValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ConfigError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    warnings: list[str] = []
    fields: dict[str, Any] = {"ports": _parse_ports(doc.get("ports", []), warnings)}
    for key, value in doc.get("limits", {}).items():
        fields[_YAML_LIMIT_KEYS[key]] = value

    return LoadedConfig(config=BenchConfig(**fields), warnings=tuple(warnings))


def load_config(path: Path | str) -> LoadedConfig:
    source = Path(path)
    content = _read_text(source)
    if source.suffix.lower() in _YAML_SUFFIXES:
        return _parse_yaml(content, source)
    return _parse_text(content, source)
