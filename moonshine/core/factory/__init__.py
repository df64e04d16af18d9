"""
Factory modules for creating Moonshine components.
"""

from moonshine.core.factory.embedder_factory import EmbedderFactory
from moonshine.core.factory.graph_factory import GraphStoreFactory

__all__ = [
    "EmbedderFactory",
    "GraphStoreFactory",
]
