"""
Tests for settings resolution from the settings table.
"""

import pytest

from moonshine.models.search import EmbeddingProvider
from moonshine.services.settings import SettingsReader
from moonshine.utils.exceptions import ConfigurationError


@pytest.fixture
def reader(store) -> SettingsReader:
    return SettingsReader(store)


class TestEmbeddingSettings:
    """Test provider, credential and model resolution."""

    async def test_defaults_to_openai(self, reader, seed):
        """Test missing provider means openai with its default model."""
        await seed.setting("openai_api_key", "sk-test")

        resolved = await reader.embedding_settings()

        assert resolved.provider == EmbeddingProvider.OPENAI
        assert resolved.api_key == "sk-test"
        assert resolved.model == "text-embedding-3-small"

    async def test_gemini_default_model(self, reader, seed):
        """Test gemini uses its own default model and key."""
        await seed.setting("embedding_provider", "gemini")
        await seed.setting("openai_api_key", "sk-test")
        await seed.setting("gemini_api_key", "gm-key")

        resolved = await reader.embedding_settings()

        assert resolved.provider == EmbeddingProvider.GEMINI
        assert resolved.api_key == "gm-key"
        assert resolved.model == "gemini-embedding-001"

    async def test_model_override(self, reader, seed):
        """Test a stored model name wins over the default."""
        await seed.setting("openai_api_key", "sk-test")
        await seed.setting("embedding_model", "text-embedding-3-large")

        resolved = await reader.embedding_settings()

        assert resolved.model == "text-embedding-3-large"

    async def test_missing_api_key(self, reader, seed):
        """Test the error names the provider lacking a key."""
        await seed.setting("embedding_provider", "gemini")
        await seed.setting("openai_api_key", "sk-test")

        with pytest.raises(ConfigurationError, match="No API key configured for provider: gemini"):
            await reader.embedding_settings()

    async def test_empty_api_key(self, reader, seed):
        """Test an empty key counts as missing."""
        await seed.setting("openai_api_key", "")

        with pytest.raises(ConfigurationError, match="provider: openai"):
            await reader.embedding_settings()

    async def test_unknown_provider(self, reader, seed):
        """Test unknown provider values are configuration errors."""
        await seed.setting("embedding_provider", "cohere")

        with pytest.raises(ConfigurationError, match="Unsupported embedding provider: cohere"):
            await reader.embedding_settings()

    async def test_settings_are_not_cached(self, reader, seed):
        """Test a changed key is picked up on the next call."""
        await seed.setting("openai_api_key", "first")
        assert (await reader.embedding_settings()).api_key == "first"

        await seed.setting("openai_api_key", "second")
        assert (await reader.embedding_settings()).api_key == "second"


class TestSearchSettings:
    """Test semantic search defaults."""

    async def test_defaults(self, reader):
        """Test defaults when nothing is stored."""
        resolved = await reader.search_settings()

        assert resolved.threshold == 0.3
        assert resolved.top_k == 5

    async def test_stored_values(self, reader, seed):
        """Test stored threshold and top_k are parsed."""
        await seed.setting("pipeline_threshold", "0.55")
        await seed.setting("pipeline_top_k", "12")

        resolved = await reader.search_settings()

        assert resolved.threshold == 0.55
        assert resolved.top_k == 12

    async def test_invalid_value(self, reader, seed):
        """Test unparsable values are configuration errors naming the key."""
        await seed.setting("pipeline_top_k", "many")

        with pytest.raises(ConfigurationError, match="pipeline_top_k"):
            await reader.search_settings()

    async def test_top_k_takes_integer_prefix(self, reader, seed):
        """Test counts written as decimals or with trailing text keep their integer part."""
        await seed.setting("pipeline_top_k", "5.0")
        assert (await reader.search_settings()).top_k == 5

        await seed.setting("pipeline_top_k", "8 results")
        assert (await reader.search_settings()).top_k == 8
