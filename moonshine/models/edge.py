"""
Relationship edge models and graph views.
"""

from enum import Enum

from pydantic import BaseModel, Field

from moonshine.models.mash import GraphNode


class RelationType(str, Enum):
    """Types of relationships between mashes."""

    RELATED_TO = "RELATED_TO"
    SUPPORTS = "SUPPORTS"
    CONFLICTS_WITH = "CONFLICTS_WITH"


class EdgeSource(str, Enum):
    """Who asserted the relationship."""

    AI = "ai"
    HUMAN = "human"


class Edge(BaseModel):
    """Directed relationship edge between two mashes."""

    id: int
    source_id: str
    target_id: str
    relation_type: RelationType
    source: EdgeSource = EdgeSource.HUMAN
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    created_at: int
    updated_at: int


class GraphEdge(BaseModel):
    """Edge as shown in graph views (no timestamps)."""

    id: int
    source_id: str
    target_id: str
    relation_type: RelationType
    source: EdgeSource
    confidence: float


class GraphData(BaseModel):
    """Filtered graph view."""

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)


class NodeDetail(BaseModel):
    """One-hop neighborhood of a single mash."""

    node: GraphNode
    neighbors: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
