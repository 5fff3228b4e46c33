"""
Storage Services Package

Provides the abstract audit storage interface and an in-memory implementation.
"""

from src.services.storage.interface import (
    AuditStorageInterface,
    StorageError,
)
from src.services.storage.memory import InMemoryAuditStorage

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    # Exceptions
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
]
