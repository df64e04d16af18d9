"""
Base interface for the knowledge store.

Everything the retrieval and graph services need from persistence goes
through this interface: mash and edge rows, the lexical index, the
embedding scan and the settings table.
"""

from abc import ABC, abstractmethod
from typing import Any

from moonshine.models.edge import Edge, GraphEdge
from moonshine.models.mash import EmbeddedMash, GraphNode, Mash, MashStatus


class GraphStore(ABC):
    """Abstract base class for knowledge store implementations."""

    read_only: bool = False

    @abstractmethod
    async def initialize(self) -> None:
        """Open the connection and create the schema if the database is new."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the connection."""
        pass

    # ═══════════════════════════════════════════════════════════
    # MASH OPERATIONS
    # ═══════════════════════════════════════════════════════════

    @abstractmethod
    async def insert_mash(self, mash: Mash) -> None:
        """Insert a new mash row."""
        pass

    @abstractmethod
    async def get_mash(self, mash_id: str) -> Mash | None:
        """
        Retrieve a mash by ID.

        Args:
            mash_id: Mash identifier

        Returns:
            Mash or None if not found
        """
        pass

    @abstractmethod
    async def mash_exists(self, mash_id: str) -> bool:
        """Check whether a mash exists."""
        pass

    @abstractmethod
    async def list_mashes(
        self,
        status: str | None = None,
        mash_type: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Mash]:
        """List mashes newest first, optionally filtered by status and type."""
        pass

    @abstractmethod
    async def update_mash(self, mash_id: str, fields: dict[str, Any], updated_at: int) -> None:
        """
        Partially update a mash.

        Args:
            mash_id: Mash identifier
            fields: Column -> value (type, status, summary, context, memo)
            updated_at: New update timestamp (ms epoch)
        """
        pass

    @abstractmethod
    async def delete_mash(self, mash_id: str) -> None:
        """Delete a mash; its edges are removed by cascade."""
        pass

    @abstractmethod
    async def count_mashes(self) -> int:
        """Count all mashes."""
        pass

    @abstractmethod
    async def count_mashes_by(self, column: str) -> dict[str, int]:
        """Count mashes grouped by ``status`` or ``type``."""
        pass

    # ═══════════════════════════════════════════════════════════
    # EDGE OPERATIONS
    # ═══════════════════════════════════════════════════════════

    @abstractmethod
    async def upsert_edge(
        self,
        source_id: str,
        target_id: str,
        relation_type: str,
        source: str,
        confidence: float,
        now: int,
    ) -> Edge:
        """
        Insert an edge or overwrite the one with the same ordered endpoints.

        Overwrites relation_type, source, confidence and updated_at; id and
        created_at of an existing edge are kept.

        Returns:
            The stored edge
        """
        pass

    @abstractmethod
    async def get_edge(self, edge_id: int) -> Edge | None:
        """Retrieve an edge by ID."""
        pass

    @abstractmethod
    async def update_edge(self, edge_id: int, fields: dict[str, Any], updated_at: int) -> None:
        """Partially update an edge (relation_type, source, confidence)."""
        pass

    @abstractmethod
    async def delete_edge(self, edge_id: int) -> None:
        """Delete an edge."""
        pass

    @abstractmethod
    async def count_edges(self) -> int:
        """Count all edges."""
        pass

    # ═══════════════════════════════════════════════════════════
    # GRAPH VIEWS
    # ═══════════════════════════════════════════════════════════

    @abstractmethod
    async def get_nodes_by_status(
        self, status: MashStatus, mash_types: list[str] | None = None
    ) -> list[GraphNode]:
        """Graph nodes with the given status, optionally restricted to types."""
        pass

    @abstractmethod
    async def get_edges_between_status(
        self,
        status: MashStatus,
        relation_types: list[str] | None = None,
        sources: list[str] | None = None,
    ) -> list[GraphEdge]:
        """Edges whose endpoints both have the given status, optionally filtered."""
        pass

    @abstractmethod
    async def get_graph_node(self, node_id: str) -> GraphNode | None:
        """Single graph node by ID."""
        pass

    @abstractmethod
    async def get_graph_nodes(self, node_ids: list[str]) -> list[GraphNode]:
        """Graph nodes for a set of IDs (missing IDs are skipped)."""
        pass

    @abstractmethod
    async def get_edges_touching(self, node_id: str) -> list[GraphEdge]:
        """All edges where the node is source or target, regardless of status."""
        pass

    # ═══════════════════════════════════════════════════════════
    # SEARCH & SETTINGS
    # ═══════════════════════════════════════════════════════════

    @abstractmethod
    async def keyword_search(self, query: str, limit: int = 20) -> list[Mash]:
        """Full-text match ordered by index rank, limited in the query itself."""
        pass

    @abstractmethod
    async def get_embedded_mashes(self) -> list[EmbeddedMash]:
        """All mashes that carry an embedding, in storage order."""
        pass

    @abstractmethod
    async def get_setting(self, key: str) -> str | None:
        """Read one value from the settings table."""
        pass
