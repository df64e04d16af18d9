"""
Argument models for every tool.

These models validate incoming arguments and generate the JSON Schema
advertised to MCP clients.
"""

from pydantic import BaseModel, ConfigDict, Field

from moonshine.models.edge import EdgeSource, RelationType
from moonshine.models.mash import MashStatus, MashType


class ToolArgs(BaseModel):
    """Base for tool arguments; unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")


class GetStatsArgs(ToolArgs):
    pass


class ListMashesArgs(ToolArgs):
    status: MashStatus | None = Field(default=None, description="Filter by status")
    type: MashType | None = Field(default=None, description="Filter by type")
    limit: int = Field(default=50, ge=1, le=200, description="Max results")
    offset: int = Field(default=0, ge=0, description="Offset for pagination")


class GetMashArgs(ToolArgs):
    id: str = Field(..., description="Mash UUID")


class CreateMashArgs(ToolArgs):
    type: MashType = Field(..., description="Mash type")
    summary: str = Field(..., min_length=1, description="Summary text")
    context: str = Field(default="", description="Additional context")
    memo: str = Field(default="", description="Personal memo")


class UpdateMashArgs(ToolArgs):
    id: str = Field(..., description="Mash UUID")
    type: MashType | None = Field(default=None, description="New type")
    summary: str | None = Field(default=None, min_length=1, description="New summary")
    context: str | None = Field(default=None, description="New context")
    memo: str | None = Field(default=None, description="New memo")


class DeleteMashArgs(ToolArgs):
    id: str = Field(..., description="Mash UUID")


class GetGraphArgs(ToolArgs):
    mash_types: list[MashType] | None = Field(default=None, description="Filter by mash types")
    relation_types: list[RelationType] | None = Field(
        default=None, description="Filter by relation types"
    )
    sources: list[EdgeSource] | None = Field(
        default=None, description="Filter edges by source (ai/human)"
    )


class GetNodeDetailArgs(ToolArgs):
    id: str = Field(..., description="Mash UUID")


class AddEdgeArgs(ToolArgs):
    source_id: str = Field(..., description="Source mash UUID")
    target_id: str = Field(..., description="Target mash UUID")
    relation_type: RelationType = Field(..., description="Relation type")
    source: EdgeSource = Field(default=EdgeSource.HUMAN, description="Edge source")
    confidence: float = Field(default=0.0, ge=0.0, le=1.0, description="Confidence score")


class UpdateEdgeArgs(ToolArgs):
    id: int = Field(..., description="Edge ID")
    relation_type: RelationType | None = Field(default=None, description="New relation type")
    confidence: float | None = Field(default=None, ge=0.0, le=1.0, description="New confidence")


class DeleteEdgeArgs(ToolArgs):
    id: int = Field(..., description="Edge ID")


class SearchKeywordArgs(ToolArgs):
    query: str = Field(..., min_length=1, description="Search query")
    limit: int = Field(default=20, ge=1, le=100, description="Max results")


class SearchSemanticArgs(ToolArgs):
    query: str = Field(..., min_length=1, description="Search query")
    threshold: float | None = Field(
        default=None, ge=0.0, le=1.0, description="Similarity threshold (default from settings)"
    )
    top_k: int | None = Field(
        default=None, ge=1, le=50, description="Max results (default from settings)"
    )
