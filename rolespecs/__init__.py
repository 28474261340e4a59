"""Role-specific API documents derived from merged service specs."""

from .exceptions import ConfigError, DocumentLoadError, RoleSpecsError, VersionMergeError
from .models import Feature, MasterSpec, RoleSpec, ServiceConfig, SpecsConfig, SwaggerConfig, coerce_config, load_config
from .specs import Specs

__version__ = "1.0.0"

__all__ = [
    "ConfigError",
    "DocumentLoadError",
    "Feature",
    "MasterSpec",
    "RoleSpec",
    "RoleSpecsError",
    "ServiceConfig",
    "Specs",
    "SpecsConfig",
    "SwaggerConfig",
    "VersionMergeError",
    "coerce_config",
    "load_config",
]
