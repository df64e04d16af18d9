"""
Graph materializer: filtered graph views, neighborhoods and edge editing.
"""

from moonshine.core.graph_store.base import GraphStore
from moonshine.models.edge import Edge, EdgeSource, GraphData, NodeDetail, RelationType
from moonshine.models.mash import MashStatus, MashType
from moonshine.utils.exceptions import NotFoundError, ReadOnlyError, ValidationError
from moonshine.utils.id_generator import now_ms
from moonshine.utils.logger import get_logger

logger = get_logger(__name__)

# Only published mashes appear in the graph view
GRAPH_STATUS = MashStatus.JARRED


class GraphMaterializer:
    """
    Builds graph views over the stored relation set.

    Features:
    - JARRED-only graph view with type, relation and source filters
    - One-hop neighborhood of any mash, regardless of status
    - Edge upsert, partial update and delete
    """

    def __init__(self, store: GraphStore):
        self.store = store

    async def get_graph(
        self,
        mash_types: list[MashType] | None = None,
        relation_types: list[RelationType] | None = None,
        sources: list[EdgeSource] | None = None,
    ) -> GraphData:
        """
        Filtered graph view of JARRED mashes.

        Edges must connect two JARRED mashes. When a type filter is given,
        edges are further restricted to the returned nodes so the view is
        closed. Empty filter lists are treated as no filter.

        Args:
            mash_types: Restrict nodes to these types
            relation_types: Restrict edges to these relation types
            sources: Restrict edges to these provenance sources

        Returns:
            GraphData with nodes and edges
        """
        nodes = await self.store.get_nodes_by_status(GRAPH_STATUS, mash_types or None)
        edges = await self.store.get_edges_between_status(
            GRAPH_STATUS, relation_types or None, sources or None
        )

        if mash_types:
            node_ids = {node.id for node in nodes}
            edges = [
                edge for edge in edges if edge.source_id in node_ids and edge.target_id in node_ids
            ]

        return GraphData(nodes=nodes, edges=edges)

    async def get_node_detail(self, node_id: str) -> NodeDetail:
        """
        A mash with its neighbors and connecting edges.

        Raises:
            NotFoundError: If the mash doesn't exist
        """
        node = await self.store.get_graph_node(node_id)
        if node is None:
            raise NotFoundError(f"Node not found: {node_id}")

        edges = await self.store.get_edges_touching(node_id)

        neighbor_ids: dict[str, None] = {}
        for edge in edges:
            if edge.source_id != node_id:
                neighbor_ids[edge.source_id] = None
            if edge.target_id != node_id:
                neighbor_ids[edge.target_id] = None

        neighbors = await self.store.get_graph_nodes(list(neighbor_ids))

        return NodeDetail(node=node, neighbors=neighbors, edges=edges)

    async def add_edge(
        self,
        source_id: str,
        target_id: str,
        relation_type: RelationType,
        source: EdgeSource = EdgeSource.HUMAN,
        confidence: float = 0.0,
    ) -> Edge:
        """
        Add an edge between two mashes, or overwrite the existing one.

        Raises:
            ReadOnlyError: If the database is read-only
            NotFoundError: If either endpoint doesn't exist
        """
        self._require_writable("Cannot add edge")

        if not await self.store.mash_exists(source_id):
            raise NotFoundError(f"Source mash not found: {source_id}")
        if not await self.store.mash_exists(target_id):
            raise NotFoundError(f"Target mash not found: {target_id}")

        edge = await self.store.upsert_edge(
            source_id=source_id,
            target_id=target_id,
            relation_type=relation_type,
            source=source,
            confidence=confidence,
            now=now_ms(),
        )
        logger.info(f"Upserted edge {edge.id}: {source_id} -> {target_id}")
        return edge

    async def update_edge(
        self,
        edge_id: int,
        relation_type: RelationType | None = None,
        confidence: float | None = None,
    ) -> Edge:
        """
        Partially update an edge.

        Raises:
            ReadOnlyError: If the database is read-only
            NotFoundError: If the edge doesn't exist
            ValidationError: If no field was supplied
        """
        self._require_writable("Cannot update edge")

        if await self.store.get_edge(edge_id) is None:
            raise NotFoundError(f"Edge not found: {edge_id}")

        fields = {}
        if relation_type is not None:
            fields["relation_type"] = relation_type
        if confidence is not None:
            fields["confidence"] = confidence

        if not fields:
            raise ValidationError("No fields to update")

        await self.store.update_edge(edge_id, fields, now_ms())
        return await self.store.get_edge(edge_id)

    async def delete_edge(self, edge_id: int) -> None:
        """
        Delete an edge.

        Raises:
            ReadOnlyError: If the database is read-only
            NotFoundError: If the edge doesn't exist
        """
        self._require_writable("Cannot delete edge")

        if await self.store.get_edge(edge_id) is None:
            raise NotFoundError(f"Edge not found: {edge_id}")

        await self.store.delete_edge(edge_id)
        logger.info(f"Deleted edge {edge_id}")

    def _require_writable(self, action: str) -> None:
        if self.store.read_only:
            raise ReadOnlyError(f"{action}: database is in read-only mode")
