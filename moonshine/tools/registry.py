"""
Tool registry: name, description, argument model and handler per tool.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from moonshine.services.engine import MoonshineEngine
from moonshine.tools import schemas


@dataclass(frozen=True)
class ToolDefinition:
    """One tool exposed to callers."""

    name: str
    description: str
    args_model: type[schemas.ToolArgs]
    handler: Callable[[MoonshineEngine, Any], Awaitable[Any]]

    def input_schema(self) -> dict[str, Any]:
        """JSON Schema for the tool arguments."""
        schema = self.args_model.model_json_schema()
        schema.pop("title", None)
        return schema


async def _get_stats(engine: MoonshineEngine, args: schemas.GetStatsArgs):
    return await engine.mashes.get_stats()


async def _list_mashes(engine: MoonshineEngine, args: schemas.ListMashesArgs):
    return await engine.mashes.list_mashes(
        status=args.status, mash_type=args.type, limit=args.limit, offset=args.offset
    )


async def _get_mash(engine: MoonshineEngine, args: schemas.GetMashArgs):
    return await engine.mashes.get_mash(args.id)


async def _create_mash(engine: MoonshineEngine, args: schemas.CreateMashArgs):
    return await engine.mashes.create_mash(
        mash_type=args.type, summary=args.summary, context=args.context, memo=args.memo
    )


async def _update_mash(engine: MoonshineEngine, args: schemas.UpdateMashArgs):
    return await engine.mashes.update_mash(
        args.id, mash_type=args.type, summary=args.summary, context=args.context, memo=args.memo
    )


async def _delete_mash(engine: MoonshineEngine, args: schemas.DeleteMashArgs):
    await engine.mashes.delete_mash(args.id)
    return {"id": args.id, "deleted": True}


async def _get_graph(engine: MoonshineEngine, args: schemas.GetGraphArgs):
    return await engine.graph.get_graph(
        mash_types=args.mash_types, relation_types=args.relation_types, sources=args.sources
    )


async def _get_node_detail(engine: MoonshineEngine, args: schemas.GetNodeDetailArgs):
    return await engine.graph.get_node_detail(args.id)


async def _add_edge(engine: MoonshineEngine, args: schemas.AddEdgeArgs):
    return await engine.graph.add_edge(
        source_id=args.source_id,
        target_id=args.target_id,
        relation_type=args.relation_type,
        source=args.source,
        confidence=args.confidence,
    )


async def _update_edge(engine: MoonshineEngine, args: schemas.UpdateEdgeArgs):
    return await engine.graph.update_edge(
        args.id, relation_type=args.relation_type, confidence=args.confidence
    )


async def _delete_edge(engine: MoonshineEngine, args: schemas.DeleteEdgeArgs):
    await engine.graph.delete_edge(args.id)
    return {"id": args.id, "deleted": True}


async def _search_keyword(engine: MoonshineEngine, args: schemas.SearchKeywordArgs):
    return await engine.retrieval.search_keyword(args.query, limit=args.limit)


async def _search_semantic(engine: MoonshineEngine, args: schemas.SearchSemanticArgs):
    return await engine.retrieval.search_semantic(
        args.query, threshold=args.threshold, top_k=args.top_k
    )


TOOLS: list[ToolDefinition] = [
    ToolDefinition(
        "get_stats",
        "Get statistics: mash counts by status/type, edge count",
        schemas.GetStatsArgs,
        _get_stats,
    ),
    ToolDefinition(
        "list_mashes",
        "List mashes with optional filtering by status and type",
        schemas.ListMashesArgs,
        _list_mashes,
    ),
    ToolDefinition("get_mash", "Get a single mash by ID", schemas.GetMashArgs, _get_mash),
    ToolDefinition(
        "create_mash",
        "Create a new mash (knowledge entry)",
        schemas.CreateMashArgs,
        _create_mash,
    ),
    ToolDefinition(
        "update_mash",
        "Update an existing mash (partial update)",
        schemas.UpdateMashArgs,
        _update_mash,
    ),
    ToolDefinition(
        "delete_mash",
        "Delete a mash and its associated edges",
        schemas.DeleteMashArgs,
        _delete_mash,
    ),
    ToolDefinition(
        "get_graph",
        "Get knowledge graph data (JARRED mashes only) with optional filtering",
        schemas.GetGraphArgs,
        _get_graph,
    ),
    ToolDefinition(
        "get_node_detail",
        "Get a node with its neighbors and connecting edges",
        schemas.GetNodeDetailArgs,
        _get_node_detail,
    ),
    ToolDefinition(
        "add_edge",
        "Add a relationship edge between two mashes (upsert)",
        schemas.AddEdgeArgs,
        _add_edge,
    ),
    ToolDefinition("update_edge", "Update an existing edge", schemas.UpdateEdgeArgs, _update_edge),
    ToolDefinition("delete_edge", "Delete an edge by ID", schemas.DeleteEdgeArgs, _delete_edge),
    ToolDefinition(
        "search_keyword",
        "Full-text keyword search using FTS5 trigram tokenizer (works well with Korean)",
        schemas.SearchKeywordArgs,
        _search_keyword,
    ),
    ToolDefinition(
        "search_semantic",
        "Semantic search using embedding cosine similarity (requires API key in settings)",
        schemas.SearchSemanticArgs,
        _search_semantic,
    ),
]

TOOLS_BY_NAME: dict[str, ToolDefinition] = {tool.name: tool for tool in TOOLS}
