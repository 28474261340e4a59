"""
specs.py
--------
Builds one API document per role at construction time.

The master spec is merged once from the configured services (or loaded from a
pre-built master document), then every role gets its own pruned deep copy.
Results are stored read-only and served through the accessors.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from .filters import filter_role_spec
from .master import build_master_spec, load_master_spec
from .models import DEPENDENCY_MODES, MasterSpec, RoleSpec, SpecsConfig, coerce_config

if TYPE_CHECKING:
    from loaders.document_loader import DocumentLoader

logger = logging.getLogger(__name__)


class Specs:
    """
    Role-specific API documents built from service specs.

    Args:
        config: SpecsConfig, or anything coerce_config accepts.
        master_spec_path: Identifier of a pre-built master document. When set,
            services are not merged and the dependency table is empty unless
            ``dependencies`` is given.
        loader: DocumentLoader used for service and master documents
            (default: FileDocumentLoader rooted at the current directory).
        dependency_mode: "transitive" follows dependency chains through the
            global table, "direct" only reports each operation's own declared ids.
        dependencies: Dependency table used with ``master_spec_path``.
    """

    def __init__(self, config: SpecsConfig | Mapping[str, Any], master_spec_path: str | None = None,
                 loader: DocumentLoader | None = None, dependency_mode: str = "transitive",
                 dependencies: Mapping[str, Sequence[str]] | None = None):
        if dependency_mode not in DEPENDENCY_MODES:
            raise ValueError(f"Unsupported dependency mode: {dependency_mode!r}")
        if loader is None:
            from loaders.document_loader import FileDocumentLoader
            loader = FileDocumentLoader()

        self.config = coerce_config(config)
        self.master_spec_path = master_spec_path
        self.dependency_mode = dependency_mode
        self._loader = loader

        self._master = self._build_master_spec(dependencies)
        self._specs_by_role = self._build_specs_for_roles()

    @property
    def master(self) -> MasterSpec:
        return self._master

    @property
    def role_ids(self) -> list[str]:
        return list(self._specs_by_role)

    def get_role_spec(self, role_id: str) -> RoleSpec | None:
        return self._specs_by_role.get(role_id)

    def get_spec(self, role_id: str) -> dict[str, Any] | None:
        """Filtered document for ``role_id``, or None for an unknown role. Do not mutate it."""
        role_spec = self._specs_by_role.get(role_id)
        return role_spec.document if role_spec else None

    def get_operation_ids(self, role_id: str) -> list[str]:
        role_spec = self._specs_by_role.get(role_id)
        return list(role_spec.operation_ids) if role_spec else []

    def get_dependency_operation_ids(self, role_id: str) -> list[str]:
        role_spec = self._specs_by_role.get(role_id)
        return list(role_spec.dependency_operation_ids) if role_spec else []

    def _build_master_spec(self, dependencies: Mapping[str, Sequence[str]] | None) -> MasterSpec:
        if self.master_spec_path is not None:
            return load_master_spec(self._loader.load(self.master_spec_path), dependencies)
        documents = [self._loader.load(service.spec) for service in self.config.services]
        return build_master_spec(self.config.swagger.spec, documents)

    def _build_specs_for_roles(self) -> Mapping[str, RoleSpec]:
        specs = {}
        for role_id, feature_ids in self.config.roles.items():
            specs[role_id] = filter_role_spec(self._master, role_id, feature_ids,
                                              self.config.features, self.dependency_mode)
        logger.info("Built specs for %d roles", len(specs))
        return MappingProxyType(specs)


__all__ = ["Specs"]
