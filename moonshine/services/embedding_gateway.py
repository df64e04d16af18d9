"""
Embedding provider gateway.

Resolves provider settings at call time and performs exactly one outbound
embedding request per query. No batching, caching or retries.
"""

import httpx

from moonshine.config import EmbedderConfig
from moonshine.core.factory.embedder_factory import EmbedderFactory
from moonshine.services.settings import SettingsReader
from moonshine.utils.logger import get_logger

logger = get_logger(__name__)


class EmbeddingGateway:
    """Turns a query string into a vector using the configured provider."""

    def __init__(
        self,
        settings: SettingsReader,
        config: EmbedderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the gateway.

        Args:
            settings: Reader for the settings table
            config: Embedder transport configuration
            transport: Optional httpx transport passed to every embedder
        """
        self.settings = settings
        self.config = config
        self.transport = transport

    async def embed(self, text: str) -> list[float]:
        """
        Embed a query string.

        Raises:
            ConfigurationError: If the provider is unknown or has no API key
            EmbeddingError: If the provider call fails
        """
        resolved = await self.settings.embedding_settings()
        logger.debug(f"Generating embedding with {resolved.provider.value}/{resolved.model}")

        embedder = EmbedderFactory.create(resolved, self.config, transport=self.transport)
        try:
            return await embedder.embed(text)
        finally:
            await embedder.close()
