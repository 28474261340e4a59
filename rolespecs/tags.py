"""Operation iteration and tag list rebuilding."""

from __future__ import annotations

from typing import Any, Iterator, Mapping


def iter_operations(document: Mapping[str, Any]) -> Iterator[tuple[str, str, Mapping[str, Any]]]:
    """Yield ``(path, method, operation)`` for every operation mapping in ``document``."""
    for path, methods in (document.get("paths") or {}).items():
        if not isinstance(methods, Mapping):
            continue
        for method, operation in methods.items():
            if isinstance(operation, Mapping):
                yield path, method, operation


def build_tags(document: Mapping[str, Any]) -> list[dict[str, str]]:
    """One ``{"name": tag}`` record per distinct operation tag, first-seen order."""
    seen: dict[str, None] = {}
    for _path, _method, operation in iter_operations(document):
        for tag in operation.get("tags") or ():
            seen.setdefault(tag, None)
    return [{"name": tag} for tag in seen]


__all__ = ["build_tags", "iter_operations"]
