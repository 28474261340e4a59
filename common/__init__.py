"""Shared application setup helpers."""
