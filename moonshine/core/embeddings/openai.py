"""
OpenAI embedder using official SDK.
"""

import httpx
import openai
from openai import AsyncOpenAI

from moonshine.core.embeddings.base import Embedder
from moonshine.utils.exceptions import EmbeddingError, ValidationError
from moonshine.utils.logger import get_logger

logger = get_logger(__name__)


class OpenAIEmbedder(Embedder):
    """
    OpenAI embedder for query embeddings.

    Sends ``{"input": text, "model": model, "encoding_format": "float"}`` to
    ``/embeddings`` and reads ``data[0].embedding``. ``encoding_format`` is
    explicit because the SDK otherwise asks for base64 and decodes it
    client-side; the float response is what the API returns for a bare
    ``{input, model}`` body. SDK retries are disabled: every call is a single
    attempt.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-small",
        base_url: str | None = None,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize OpenAI embedder.

        Args:
            api_key: OpenAI API key
            model: Embedding model name (e.g., "text-embedding-3-small")
            base_url: Optional custom base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.model = model

        http_client = None
        if transport is not None:
            http_client = httpx.AsyncClient(transport=transport, timeout=timeout)

        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )

    async def embed(self, text: str) -> list[float]:
        """
        Generate embedding for text using OpenAI.

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

        try:
            response = await self.client.embeddings.create(
                model=self.model, input=text, encoding_format="float"
            )
        except openai.APIStatusError as e:
            logger.error(
                f"OpenAI embedding API error: {e.status_code}",
                extra={"model": self.model, "status": e.status_code},
            )
            raise EmbeddingError(
                f"OpenAI embedding API error: {e.status_code} {e.response.text}"
            ) from e
        except openai.APIError as e:
            logger.bind(model=self.model).error(f"OpenAI embedding request failed: {e}")
            raise EmbeddingError(f"OpenAI embedding request failed: {e}") from e

        if not response.data:
            raise EmbeddingError("OpenAI returned empty embedding response")

        return list(response.data[0].embedding)

    async def close(self):
        """Close OpenAI client."""
        await self.client.close()
