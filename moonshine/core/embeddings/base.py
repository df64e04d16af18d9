"""
Abstract base class for embedding providers.
Handles query text to vector embeddings for semantic search.
"""

from abc import ABC, abstractmethod


class Embedder(ABC):
    """
    Abstract base for embedding providers.

    Responsibilities:
    - Generate one query-side embedding per call
    - Surface non-success responses as EmbeddingError with status and body
    """

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """
        Generate embedding vector for text.

        Args:
            text: Text to embed

        Returns:
            List of floats representing the embedding vector

        Raises:
            ValidationError: If text is empty
            EmbeddingError: If embedding generation fails
        """
        pass

    @abstractmethod
    async def close(self):
        """Close any open connections."""
        pass
