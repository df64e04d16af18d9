"""
Knowledge store implementations for Moonshine.

Available backends:
- SQLiteGraphStore: the desktop app's SQLite database (FTS5 trigram index)
"""

from moonshine.core.graph_store.base import GraphStore
from moonshine.core.graph_store.sqlite_store import SQLiteGraphStore

__all__ = [
    "GraphStore",
    "SQLiteGraphStore",
]
