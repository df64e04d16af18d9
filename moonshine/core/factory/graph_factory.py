"""
Factory for creating graph store backends.
"""

from moonshine.config import Config
from moonshine.core.graph_store.base import GraphStore
from moonshine.core.graph_store.sqlite_store import SQLiteGraphStore


class GraphStoreFactory:
    """Factory for creating graph store backends from configuration."""

    @staticmethod
    def create(config: Config) -> GraphStore:
        """
        Create graph store from configuration.

        Args:
            config: Main configuration object

        Returns:
            Graph store instance (not yet connected)
        """
        return SQLiteGraphStore(
            db_path=config.storage.db_path,
            read_only=config.storage.read_only,
            create_if_missing=config.storage.create_if_missing,
            busy_timeout_ms=config.storage.busy_timeout_ms,
        )
