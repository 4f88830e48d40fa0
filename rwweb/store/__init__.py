"""SQLite document graph store and its id counters."""

from rwweb.store.db import DocumentStore
from rwweb.store.ids import IDAllocatorError

__all__ = [
    "DocumentStore",
    "IDAllocatorError",
]
