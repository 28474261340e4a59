"""Document loaders that feed parsed service specs into the builder."""

from .document_loader import DocumentLoader, FileDocumentLoader, MappingDocumentLoader, parse_document

__all__ = [
    "DocumentLoader",
    "FileDocumentLoader",
    "MappingDocumentLoader",
    "parse_document",
]
