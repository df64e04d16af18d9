"""
Embedder abstraction layer for query embeddings.

Supported providers:
- OpenAI (official SDK)
- Gemini (REST over httpx)
"""

from moonshine.core.embeddings.base import Embedder
from moonshine.core.embeddings.gemini import GeminiEmbedder
from moonshine.core.embeddings.openai import OpenAIEmbedder

__all__ = [
    "Embedder",
    "GeminiEmbedder",
    "OpenAIEmbedder",
]
