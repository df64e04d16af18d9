"""
Gemini embedder using the REST ``embedContent`` endpoint over httpx.
"""

import httpx

from moonshine.core.embeddings.base import Embedder
from moonshine.utils.exceptions import EmbeddingError, ValidationError
from moonshine.utils.logger import get_logger

logger = get_logger(__name__)

# Query-side embeddings; documents are embedded as RETRIEVAL_DOCUMENT by the pipeline.
QUERY_TASK_TYPE = "RETRIEVAL_QUERY"


class GeminiEmbedder(Embedder):
    """
    Gemini embedder for query embeddings.

    Request: ``POST {base_url}/models/{model}:embedContent?key=...`` with the
    model repeated in the body, the text wrapped as ``content.parts`` and a
    query task type. Response: ``embedding.values``.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-embedding-001",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize Gemini embedder.

        Args:
            api_key: Gemini API key
            model: Embedding model name (e.g., "gemini-embedding-001")
            base_url: API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def embed(self, text: str) -> list[float]:
        """
        Generate embedding for text using Gemini.

        Args:
            text: Text to embed

        Returns:
            Embedding vector as list of floats

        Raises:
            ValidationError: If text is empty
            EmbeddingError: If the API returns a non-success status or is unreachable
        """
        if not text or not text.strip():
            raise ValidationError("Text cannot be empty")

        url = f"{self.base_url}/models/{self.model}:embedContent"
        body = {
            "model": f"models/{self.model}",
            "content": {"parts": [{"text": text}]},
            "taskType": QUERY_TASK_TYPE,
        }

        try:
            response = await self.client.post(url, params={"key": self.api_key}, json=body)
        except httpx.HTTPError as e:
            logger.bind(model=self.model).error(f"Gemini embedding request failed: {e}")
            raise EmbeddingError(f"Gemini embedding request failed: {e}") from e

        if not response.is_success:
            logger.error(
                f"Gemini embedding API error: {response.status_code}",
                extra={"model": self.model, "status": response.status_code},
            )
            raise EmbeddingError(
                f"Gemini embedding API error: {response.status_code} {response.text}"
            )

        try:
            return list(response.json()["embedding"]["values"])
        except (ValueError, KeyError, TypeError) as e:
            raise EmbeddingError("Gemini returned invalid embedding response") from e

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()
