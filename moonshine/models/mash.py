"""
Mash (knowledge entry) models.
"""

from enum import Enum

from pydantic import BaseModel, Field


class MashType(str, Enum):
    """Kinds of knowledge entries."""

    DECISION = "결정"
    PROBLEM = "문제"
    INSIGHT = "인사이트"
    QUESTION = "질문"


class MashStatus(str, Enum):
    """
    Mash pipeline status.

    Nominal order: MASH_TUN -> ON_STILL -> DISTILLED -> JARRED, with RE_EMBED and
    RE_EXTRACT marking entries queued for re-processing. Transitions are not
    enforced here; the desktop pipeline owns them.
    """

    MASH_TUN = "MASH_TUN"
    ON_STILL = "ON_STILL"
    DISTILLED = "DISTILLED"
    JARRED = "JARRED"
    RE_EMBED = "RE_EMBED"
    RE_EXTRACT = "RE_EXTRACT"


class Mash(BaseModel):
    """
    A single knowledge entry.

    The raw ``embedding`` column is not part of this model:
    embedding bytes never leave the store layer except as search candidates.
    """

    id: str = Field(..., description="Mash UUID")
    type: MashType
    status: MashStatus
    summary: str = Field(..., min_length=1)
    context: str = ""
    memo: str = ""
    created_at: int = Field(..., description="Creation time (ms epoch)")
    updated_at: int = Field(..., description="Last update time (ms epoch)")


class GraphNode(BaseModel):
    """Mash as shown in graph views (no status)."""

    id: str
    type: MashType
    summary: str
    context: str = ""
    memo: str = ""
    created_at: int
    updated_at: int


class EmbeddedMash(BaseModel):
    """Semantic search candidate loaded with its raw embedding bytes."""

    id: str
    type: MashType
    summary: str
    context: str = ""
    memo: str = ""
    embedding: bytes
