"""Persistence for generated documents."""

from __future__ import annotations

from floe_dummy.loaders.memory import DocumentStore, InMemoryDocumentStore

__all__ = ["DocumentStore", "InMemoryDocumentStore"]
