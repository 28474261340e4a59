"""
document_loader.py
------------------
Loaders that turn a service spec identifier into a parsed document.

Identifiers are file paths (relative to a root directory) or http(s) URLs.
Documents are parsed once per identifier and cached, so repeated loads within
one build return equal content. Every call hands out a deep copy.
"""

from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping, Protocol

import httpx
import yaml

from rolespecs.exceptions import DocumentLoadError

logger = logging.getLogger(__name__)

Json = dict[str, Any]


class DocumentLoader(Protocol):
    """Interface Protocol for document loaders."""

    def load(self, identifier: str) -> Json: ...


def _looks_like_url(identifier: str) -> bool:
    return identifier.startswith(("http://", "https://"))


def parse_document(text: str, name: str = "") -> Json:
    """Parse JSON or YAML text according to ``name``'s suffix (JSON first otherwise)."""
    suffix = Path(name.split("?")[0]).suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            document = yaml.safe_load(text)
        else:
            try:
                document = json.loads(text)
            except json.JSONDecodeError:
                if suffix == ".json":
                    raise
                document = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise DocumentLoadError(f"Cannot parse document {name or '<text>'}: {exc}") from exc
    if not isinstance(document, dict):
        raise DocumentLoadError(f"Document {name or '<text>'} is not a mapping")
    return document


class FileDocumentLoader:
    """
    Load documents from the filesystem or over HTTP.

    Args:
        root: Directory relative identifiers are resolved against (default: cwd).
        client: Optional httpx.Client used for URL identifiers.
        timeout: Timeout in seconds for HTTP requests.
    """

    def __init__(self, root: str | Path | None = None, client: httpx.Client | None = None,
                 timeout: float = 60.0):
        self.root = Path(root) if root is not None else Path.cwd()
        self.timeout = timeout
        self._client = client
        self._cache: dict[str, Json] = {}

    def load(self, identifier: str) -> Json:
        if identifier not in self._cache:
            if _looks_like_url(identifier):
                self._cache[identifier] = self._fetch(identifier)
            else:
                self._cache[identifier] = self._read(identifier)
        return deepcopy(self._cache[identifier])

    def _read(self, identifier: str) -> Json:
        path = Path(identifier)
        if not path.is_absolute():
            path = self.root / path
        logger.debug("Reading document %s", path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DocumentLoadError(f"Cannot read document {path}: {exc}") from exc
        return parse_document(text, path.name)

    def _fetch(self, url: str) -> Json:
        logger.debug("Fetching document %s", url)
        client = self._client or httpx.Client(timeout=self.timeout)
        try:
            response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise DocumentLoadError(f"Cannot fetch document {url}: {exc}") from exc
        finally:
            if self._client is None:
                client.close()
        name = url
        if "yaml" in response.headers.get("content-type", ""):
            name = f"{url.split('?')[0]}.yaml"
        return parse_document(response.text, name)

    def close(self):
        if self._client is not None:
            self._client.close()


class MappingDocumentLoader:
    """Serve already parsed documents by identifier."""

    def __init__(self, documents: Mapping[str, Mapping[str, Any]]):
        self._documents = {key: deepcopy(dict(doc)) for key, doc in documents.items()}

    def load(self, identifier: str) -> Json:
        try:
            return deepcopy(self._documents[identifier])
        except KeyError:
            raise DocumentLoadError(f"Unknown document identifier: {identifier}") from None


__all__ = ["DocumentLoader", "FileDocumentLoader", "MappingDocumentLoader", "parse_document"]
