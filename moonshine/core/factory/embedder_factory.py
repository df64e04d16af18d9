"""
Factory for creating embedder providers.
"""

import httpx

from moonshine.config import EmbedderConfig
from moonshine.core.embeddings.base import Embedder
from moonshine.core.embeddings.gemini import GeminiEmbedder
from moonshine.core.embeddings.openai import OpenAIEmbedder
from moonshine.models.search import EmbeddingProvider, EmbeddingSettings
from moonshine.utils.exceptions import ConfigurationError


class EmbedderFactory:
    """Factory for creating embedder providers from resolved settings."""

    @staticmethod
    def create(
        settings: EmbeddingSettings,
        config: EmbedderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Embedder:
        """
        Create embedder for the active provider.

        Args:
            settings: Provider, credential and model read from the settings table
            config: Transport configuration (base URLs, timeout)
            transport: Optional httpx transport shared by both providers

        Returns:
            Embedder instance

        Raises:
            ConfigurationError: If provider is not supported
        """
        if settings.provider == EmbeddingProvider.OPENAI:
            return OpenAIEmbedder(
                api_key=settings.api_key,
                model=settings.model,
                base_url=config.openai_base_url,
                timeout=config.timeout,
                transport=transport,
            )
        elif settings.provider == EmbeddingProvider.GEMINI:
            return GeminiEmbedder(
                api_key=settings.api_key,
                model=settings.model,
                base_url=config.gemini_base_url,
                timeout=config.timeout,
                transport=transport,
            )
        else:
            raise ConfigurationError(f"Unsupported embedding provider: {settings.provider}")
