"""
Schema reference discovery.

scan_references walks a JSON value and returns the definition names it points
at through ``{"$ref": "#/definitions/<name>"}`` entries. resolve_reachable
expands a seed set of names to everything reachable through the definitions
table.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Mapping

logger = logging.getLogger(__name__)

DEFINITION_PREFIX = "#/definitions/"


def _decode_json_pointer_token(token: str) -> str:
    # RFC 6901: ~1 is "/", ~0 is "~"
    return token.replace("~1", "/").replace("~0", "~")


def _iter_refs(node: Any) -> Iterator[str]:
    if isinstance(node, Mapping):
        ref = node.get("$ref")
        if isinstance(ref, str):
            yield ref
        for v in node.values():
            yield from _iter_refs(v)
    elif isinstance(node, list):
        for v in node:
            yield from _iter_refs(v)


def definition_name(ref: str) -> str | None:
    """Return the definition name of an internal ``#/definitions/`` ref, else None."""
    if not ref.startswith(DEFINITION_PREFIX):
        return None
    token = ref[len(DEFINITION_PREFIX):]
    if not token or "/" in token:
        return None
    return _decode_json_pointer_token(token)


def scan_references(value: Any) -> set[str]:
    """Names of every definition referenced anywhere inside ``value``."""
    names = set()
    for ref in _iter_refs(value):
        name = definition_name(ref)
        if name is not None:
            names.add(name)
    return names


def resolve_reachable(definitions: Mapping[str, Any], seed: Iterable[str]) -> set[str]:
    """
    Transitive closure of definition references starting from ``seed``.

    Names missing from ``definitions`` stay in the result but lead nowhere.
    """
    known = set(seed)
    frontier = set(known)
    while frontier:
        found: set[str] = set()
        for name in frontier:
            if name not in definitions:
                logger.debug("Dangling definition reference: %s", name)
                continue
            found |= scan_references(definitions[name])
        frontier = found - known
        known |= frontier
    return known


__all__ = ["DEFINITION_PREFIX", "definition_name", "resolve_reachable", "scan_references"]
