"""
Search result and runtime settings models.
"""

from enum import Enum

from pydantic import BaseModel

from moonshine.models.mash import MashType


class EmbeddingProvider(str, Enum):
    """Supported remote embedding services."""

    OPENAI = "openai"
    GEMINI = "gemini"


DEFAULT_EMBEDDING_MODELS = {
    EmbeddingProvider.OPENAI: "text-embedding-3-small",
    EmbeddingProvider.GEMINI: "gemini-embedding-001",
}


class EmbeddingSettings(BaseModel):
    """Provider selection resolved from the settings table."""

    provider: EmbeddingProvider
    api_key: str
    model: str


class SearchSettings(BaseModel):
    """Semantic search defaults resolved from the settings table."""

    threshold: float = 0.3
    top_k: int = 5


class SimilarResult(BaseModel):
    """Semantic search hit (similarity rounded to 4 decimals)."""

    id: str
    type: MashType
    summary: str
    context: str
    memo: str
    similarity: float
