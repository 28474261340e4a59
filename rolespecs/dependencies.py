"""
Dependency chains between operations.

Operations declare the operation ids they depend on through the
``x-dependency-operation-ids`` extension. A chain is a dotted string rooted at
the operation, e.g. ``"createOrder.getCart.getUser"``.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Iterable, Mapping, Sequence

from .models import DEPENDENCY_FIELD, DEPENDENCY_MODES
from .tags import iter_operations


def declared_dependencies(operation: Mapping[str, Any]) -> list[str]:
    """Dependency ids declared on one operation, empty when absent."""
    deps = operation.get(DEPENDENCY_FIELD) or []
    if isinstance(deps, str):
        return [deps]
    return [d for d in deps if isinstance(d, str)]


def direct_chains(operation_id: str, direct_deps: Sequence[str] | None) -> list[str]:
    """One ``op.dep`` chain per declared dependency, no table lookup."""
    return [f"{operation_id}.{dep}" for dep in direct_deps or ()]


def resolve_chains(operation_id: str, direct_deps: Sequence[str] | None,
                   table: Mapping[str, Sequence[str]]) -> list[str]:
    """
    Every dependency chain reachable from ``operation_id``, breadth first.

    A dependency id is followed at most once per root: the exclusion set starts
    as the direct dependencies and grows with every dependency set found, which
    also stops cycles.
    """
    deps = list(dict.fromkeys(direct_deps or ()))
    excluded = set(deps)
    chains: list[str] = []
    queue = deque([(operation_id, deps)])
    while queue:
        prefix, level = queue.popleft()
        for dep in level:
            chains.append(f"{prefix}.{dep}")
        for dep in level:
            nested = [d for d in dict.fromkeys(table.get(dep, ())) if d not in excluded]
            if not nested:
                continue
            excluded.update(nested)
            queue.append((f"{prefix}.{dep}", nested))
    return chains


def collect_dependency_chains(document: Mapping[str, Any], table: Mapping[str, Sequence[str]],
                              mode: str = "transitive") -> list[str]:
    """Deduplicated chains for every operation with an id in ``document``."""
    if mode not in DEPENDENCY_MODES:
        raise ValueError(f"Unsupported dependency mode: {mode!r}")
    chains: list[str] = []
    for _path, _method, operation in iter_operations(document):
        operation_id = operation.get("operationId")
        if not operation_id:
            continue
        if mode == "direct":
            chains.extend(direct_chains(operation_id, declared_dependencies(operation)))
            continue
        if DEPENDENCY_FIELD in operation:
            deps: Sequence[str] = declared_dependencies(operation)
        else:
            deps = table.get(operation_id, ())
        chains.extend(resolve_chains(operation_id, deps, table))
    return _unique(chains)


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


__all__ = [
    "collect_dependency_chains",
    "declared_dependencies",
    "direct_chains",
    "resolve_chains",
]
