"""
Master spec construction.

Merges the service documents into one document: paths are prefixed with each
service's basePath, definitions are deep-merged, tags and version are derived
from the merged result. The global dependency table is recorded on the side.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from itertools import zip_longest
from types import MappingProxyType
from typing import Any, Mapping, Sequence

from .dependencies import declared_dependencies
from .exceptions import VersionMergeError
from .models import MasterSpec
from .tags import build_tags, iter_operations

logger = logging.getLogger(__name__)


def merge_definitions(target: dict[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """
    Deep-merge ``source`` into ``target`` in place.

    Mappings merge key by key and lists merge position by position; earlier
    list items past the end of the later list are kept. Any other value is
    replaced by the later one.
    """
    for key, value in source.items():
        target[key] = _merge_value(target.get(key), value)
    return target


def _merge_value(current: Any, value: Any) -> Any:
    if isinstance(current, dict) and isinstance(value, Mapping):
        return merge_definitions(current, value)
    if isinstance(current, list) and isinstance(value, list):
        for index, item in enumerate(value):
            if index < len(current):
                current[index] = _merge_value(current[index], item)
            else:
                current.append(deepcopy(item))
        return current
    return deepcopy(value)


def merge_versions(versions: Sequence[str]) -> str:
    """
    Component-wise sum of version strings: ``["1.2.0", "0.1.5"] -> "1.3.5"``.

    Shorter versions count as zero in the missing positions.
    """
    numbers = []
    for version in versions:
        parts = str(version).split(".")
        if not all(part.isascii() and part.isdigit() for part in parts):
            raise VersionMergeError(f"Invalid version {version!r}: components must be integers")
        numbers.append([int(part) for part in parts])
    return ".".join(str(sum(column)) for column in zip_longest(*numbers, fillvalue=0))


def build_dependency_table(documents: Sequence[Mapping[str, Any]]) -> Mapping[str, tuple[str, ...]]:
    """Map every operation id across ``documents`` to its declared dependency ids."""
    table: dict[str, tuple[str, ...]] = {}
    for document in documents:
        for _path, _method, operation in iter_operations(document):
            operation_id = operation.get("operationId")
            if operation_id:
                table[operation_id] = tuple(declared_dependencies(operation))
    return MappingProxyType(table)


def build_master_spec(skeleton: Mapping[str, Any], documents: Sequence[Mapping[str, Any]]) -> MasterSpec:
    """Merge service ``documents`` (in order, later ones win) on top of ``skeleton``."""
    spec = deepcopy(dict(skeleton))
    spec["tags"] = []
    spec["paths"] = {}
    spec["definitions"] = {}

    for document in documents:
        document = deepcopy(document)
        base_path = document.get("basePath") or ""
        for path, methods in (document.get("paths") or {}).items():
            new_path = f"{base_path}{path}"
            if new_path in spec["paths"]:
                logger.warning("Path %s redefined by a later service, keeping the last one", new_path)
            spec["paths"][new_path] = methods
        merge_definitions(spec["definitions"], document.get("definitions") or {})
        logger.debug("Merged service with basePath %r (%d paths)", base_path, len(document.get("paths") or {}))

    spec["tags"] = build_tags(spec)
    info = spec.setdefault("info", {})
    if documents:
        info["version"] = merge_versions([(d.get("info") or {}).get("version", "0") for d in documents])

    logger.info("Built master spec from %d services: %d paths, %d definitions",
                len(documents), len(spec["paths"]), len(spec["definitions"]))
    return MasterSpec(document=spec, dependencies=build_dependency_table(documents))


def load_master_spec(document: Mapping[str, Any],
                     dependencies: Mapping[str, Sequence[str]] | None = None) -> MasterSpec:
    """Use a pre-built master document as-is; the dependency table is empty unless supplied."""
    table = {op: (deps,) if isinstance(deps, str) else tuple(deps)
             for op, deps in (dependencies or {}).items()}
    logger.info("Using pre-built master spec (%d paths)", len(document.get("paths") or {}))
    return MasterSpec(document=deepcopy(dict(document)), dependencies=MappingProxyType(table))


__all__ = [
    "build_dependency_table",
    "build_master_spec",
    "load_master_spec",
    "merge_definitions",
    "merge_versions",
]
