"""Persistent stores for properties, document matrices and overrides."""

from gestao_docs.store.backends import JsonFileBackend, MemoryBackend, StorageBackend
from gestao_docs.store.gestao import GestaoDataStore

__all__ = ["GestaoDataStore", "JsonFileBackend", "MemoryBackend", "StorageBackend"]
