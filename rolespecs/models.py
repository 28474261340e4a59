"""Pydantic models for the build configuration and frozen build results."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigError

DEPENDENCY_FIELD = "x-dependency-operation-ids"

DEPENDENCY_MODES = ("transitive", "direct")


class SwaggerConfig(BaseModel):
    """Document skeleton every master spec starts from."""

    spec: dict[str, Any] = Field(default_factory=dict, description="Top-level swagger fields")


class ServiceConfig(BaseModel):
    """One service whose document gets merged into the master spec."""

    model_config = ConfigDict(extra="allow")

    spec: str = Field(..., min_length=1, description="Identifier handed to the document loader")


class Feature(BaseModel):
    """A named bundle of operation ids exposed together."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    operation_ids: list[str] = Field(default_factory=list, alias="operationIds")


class SpecsConfig(BaseModel):
    """Construction input: skeleton, services, features and roles."""

    swagger: SwaggerConfig = Field(default_factory=SwaggerConfig)
    services: list[ServiceConfig] = Field(default_factory=list)
    features: dict[str, Feature] = Field(default_factory=dict)
    roles: dict[str, list[str]] = Field(default_factory=dict)


@dataclass(frozen=True)
class MasterSpec:
    """Merged document plus the global operation dependency table."""

    document: dict[str, Any]
    dependencies: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class RoleSpec:
    """Filtered document and derived lists for one role."""

    role_id: str
    document: dict[str, Any]
    operation_ids: tuple[str, ...] = ()
    dependency_operation_ids: tuple[str, ...] = ()
# ---------------------------------------------------------------------------
# helpers


def coerce_config(value: Any) -> SpecsConfig:
    """Normalize supported inputs into a SpecsConfig instance."""
    if isinstance(value, SpecsConfig):
        return value
    payload: Mapping[str, Any]
    if isinstance(value, Mapping):
        payload = value
    elif isinstance(value, (str, bytes)):
        payload = _load_text_payload(value)
    elif isinstance(value, Path):
        payload = _load_text_payload(value.read_text())
    else:
        raise TypeError("Unsupported value for specs configuration")
    try:
        return SpecsConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid specs configuration: {exc}") from exc


def load_config(path: str | Path) -> SpecsConfig:
    """Read a YAML or JSON configuration file."""
    path = Path(path)
    try:
        return coerce_config(path)
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration {path}: {exc}") from exc


def _load_text_payload(raw: str | bytes) -> dict[str, Any]:
    """Interpret raw text as YAML first, falling back to JSON."""
    text = raw.decode() if isinstance(raw, bytes) else raw
    try:
        payload = yaml.safe_load(text) or {}
    except yaml.YAMLError:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Configuration is neither YAML nor JSON: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise ConfigError("Configuration must be a mapping")
    return payload


__all__ = [
    "DEPENDENCY_FIELD",
    "DEPENDENCY_MODES",
    "Feature",
    "MasterSpec",
    "RoleSpec",
    "ServiceConfig",
    "SpecsConfig",
    "SwaggerConfig",
    "coerce_config",
    "load_config",
]
