"""Persistence layer: abstract interface and implementations."""

from .base import StoreProtocol
from .file_store import FileStore
from .memory_store import MemoryStore

__all__ = ["StoreProtocol", "FileStore", "MemoryStore"]
