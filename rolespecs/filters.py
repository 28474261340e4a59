"""Per-role filtering of the master spec."""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Iterable, Mapping

from .dependencies import collect_dependency_chains
from .models import Feature, MasterSpec, RoleSpec
from .references import resolve_reachable, scan_references
from .tags import build_tags, iter_operations

logger = logging.getLogger(__name__)


def collect_operation_ids(features: Mapping[str, Feature], feature_ids: Iterable[str]) -> list[str]:
    """Deduplicated operation ids granted by ``feature_ids``; unknown features add nothing."""
    operation_ids: dict[str, None] = {}
    for feature_id in feature_ids:
        feature = features.get(feature_id)
        if feature is None:
            logger.debug("Skipping unknown feature %r", feature_id)
            continue
        operation_ids.update(dict.fromkeys(feature.operation_ids))
    return list(operation_ids)


def filter_operations(spec: dict[str, Any], operation_ids: Iterable[str]) -> None:
    """Drop every path entry that is not an operation with a selected id."""
    selected = set(operation_ids)
    for methods in (spec.get("paths") or {}).values():
        if not isinstance(methods, dict):
            continue
        for method in list(methods):
            operation = methods[method]
            operation_id = operation.get("operationId") if isinstance(operation, Mapping) else None
            if not operation_id or operation_id not in selected:
                del methods[method]


def filter_paths(spec: dict[str, Any]) -> None:
    """Drop every path left without operations."""
    paths = spec.get("paths") or {}
    for path in [p for p, methods in paths.items() if not isinstance(methods, Mapping) or not methods]:
        del paths[path]


def filter_definitions(spec: dict[str, Any]) -> None:
    """Drop every definition not reachable from the remaining operations."""
    seed: set[str] = set()
    for _path, _method, operation in iter_operations(spec):
        seed |= scan_references(operation)
    definitions = spec.get("definitions") or {}
    reachable = resolve_reachable(definitions, seed)
    unused = [name for name in definitions if name not in reachable]
    for name in unused:
        del definitions[name]
    logger.debug("Pruned %d unreachable definitions", len(unused))


def operation_ids_of(document: Mapping[str, Any]) -> list[str]:
    """Distinct operation ids present in ``document``, in document order."""
    ids = (operation.get("operationId") for _p, _m, operation in iter_operations(document))
    return list(dict.fromkeys(i for i in ids if i))


def upper_first(value: str) -> str:
    return value[:1].upper() + value[1:]


def filter_role_spec(master: MasterSpec, role_id: str, feature_ids: Iterable[str],
                     features: Mapping[str, Feature], dependency_mode: str = "transitive") -> RoleSpec:
    """Build the pruned document and dependency chains for one role."""
    operation_ids = collect_operation_ids(features, feature_ids)

    spec = deepcopy(master.document)
    filter_operations(spec, operation_ids)
    filter_paths(spec)
    filter_definitions(spec)

    spec["tags"] = build_tags(spec)
    spec.setdefault("info", {})["title"] = upper_first(role_id)

    chains = collect_dependency_chains(spec, master.dependencies, dependency_mode)
    role_spec = RoleSpec(
        role_id=role_id,
        document=spec,
        operation_ids=tuple(operation_ids_of(spec)),
        dependency_operation_ids=tuple(chains),
    )
    logger.info("Built spec for role %r: %d operations, %d definitions",
                role_id, len(role_spec.operation_ids), len(spec.get("definitions") or {}))
    return role_spec


__all__ = [
    "collect_operation_ids",
    "filter_definitions",
    "filter_operations",
    "filter_paths",
    "filter_role_spec",
    "operation_ids_of",
    "upper_first",
]
