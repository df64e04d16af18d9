"""
Services for Moonshine.

- MoonshineEngine: owns the store and wires the services
- MashService: mash CRUD and statistics
- GraphMaterializer: graph views and edge editing
- RetrievalEngine: keyword and semantic search
- EmbeddingGateway: per-call embedding provider dispatch
- SettingsReader: runtime settings from the database
"""

from moonshine.services.embedding_gateway import EmbeddingGateway
from moonshine.services.engine import MoonshineEngine
from moonshine.services.graph import GraphMaterializer
from moonshine.services.mashes import MashService
from moonshine.services.retrieval import RetrievalEngine
from moonshine.services.settings import SettingsReader

__all__ = [
    "MoonshineEngine",
    "MashService",
    "GraphMaterializer",
    "RetrievalEngine",
    "EmbeddingGateway",
    "SettingsReader",
]
