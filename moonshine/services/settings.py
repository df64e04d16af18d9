"""
Runtime settings read from the database ``settings`` table.

Values are owned by the desktop app and re-read on every call so a change
made there takes effect on the next request.
"""

import re
from collections.abc import Callable

from moonshine.core.graph_store.base import GraphStore
from moonshine.models.search import (
    DEFAULT_EMBEDDING_MODELS,
    EmbeddingProvider,
    EmbeddingSettings,
    SearchSettings,
)
from moonshine.utils.exceptions import ConfigurationError

PROVIDER_KEY = "embedding_provider"
MODEL_KEY = "embedding_model"
THRESHOLD_KEY = "pipeline_threshold"
TOP_K_KEY = "pipeline_top_k"

LEADING_INT = re.compile(r"[+-]?\d+")


def api_key_setting(provider: EmbeddingProvider) -> str:
    """Settings key holding the credential for a provider."""
    return f"{provider.value}_api_key"


class SettingsReader:
    """Resolves embedding and search settings without caching."""

    def __init__(self, store: GraphStore):
        self.store = store

    async def embedding_settings(self) -> EmbeddingSettings:
        """
        Resolve the active embedding provider, its credential and model.

        Raises:
            ConfigurationError: If the provider is unknown or has no API key
        """
        raw_provider = await self.store.get_setting(PROVIDER_KEY) or EmbeddingProvider.OPENAI.value
        try:
            provider = EmbeddingProvider(raw_provider)
        except ValueError as e:
            raise ConfigurationError(f"Unsupported embedding provider: {raw_provider}") from e

        api_key = await self.store.get_setting(api_key_setting(provider))
        if not api_key:
            raise ConfigurationError(f"No API key configured for provider: {provider.value}")

        model = await self.store.get_setting(MODEL_KEY) or DEFAULT_EMBEDDING_MODELS[provider]

        return EmbeddingSettings(provider=provider, api_key=api_key, model=model)

    async def search_settings(self) -> SearchSettings:
        """Resolve default similarity threshold and result cap."""
        defaults = SearchSettings()
        return SearchSettings(
            threshold=await self._number(THRESHOLD_KEY, defaults.threshold, float),
            top_k=await self._number(TOP_K_KEY, defaults.top_k, _leading_int),
        )

    async def _number(self, key: str, default: float | int, cast: Callable) -> float | int:
        raw = await self.store.get_setting(key)
        if raw is None or raw.strip() == "":
            return default
        try:
            return cast(raw.strip())
        except (ValueError, OverflowError) as e:
            raise ConfigurationError(f"Invalid value for setting {key}: {raw!r}") from e


def _leading_int(raw: str) -> int:
    """Integer prefix of a stored count ("5", "5.0" and "12 results" all parse)."""
    match = LEADING_INT.match(raw)
    if match is None:
        raise ValueError(f"no leading integer in {raw!r}")
    return int(match.group())
