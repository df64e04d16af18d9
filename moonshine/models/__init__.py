"""
Data models for Moonshine.

Core models:
- Mash, GraphNode, EmbeddedMash: knowledge entries
- MashType, MashStatus: entry vocabularies
- Edge, GraphEdge, GraphData, NodeDetail: relationships and graph views
- RelationType, EdgeSource: relationship vocabularies
- SimilarResult, SearchSettings, EmbeddingSettings: retrieval
- ToolResult, ToolError, ErrorKind: tagged tool results
"""

from moonshine.models.edge import (
    Edge,
    EdgeSource,
    GraphData,
    GraphEdge,
    NodeDetail,
    RelationType,
)
from moonshine.models.mash import EmbeddedMash, GraphNode, Mash, MashStatus, MashType
from moonshine.models.result import ErrorKind, ToolError, ToolResult
from moonshine.models.search import (
    DEFAULT_EMBEDDING_MODELS,
    EmbeddingProvider,
    EmbeddingSettings,
    SearchSettings,
    SimilarResult,
)

__all__ = [
    # Mash models
    "Mash",
    "MashType",
    "MashStatus",
    "GraphNode",
    "EmbeddedMash",
    # Edge models
    "Edge",
    "EdgeSource",
    "RelationType",
    "GraphEdge",
    "GraphData",
    "NodeDetail",
    # Search models
    "EmbeddingProvider",
    "EmbeddingSettings",
    "SearchSettings",
    "SimilarResult",
    "DEFAULT_EMBEDDING_MODELS",
    # Results
    "ToolResult",
    "ToolError",
    "ErrorKind",
]
