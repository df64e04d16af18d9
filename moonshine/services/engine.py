"""
Moonshine engine - owns the store connection and wires the services.

The engine is constructed once at startup. Every service receives the same
store instance; the connection is opened by ``initialize`` and released by
``close`` (or by leaving the ``async with`` block).
"""

import httpx

from moonshine.config import Config
from moonshine.core.factory.graph_factory import GraphStoreFactory
from moonshine.core.graph_store.base import GraphStore
from moonshine.services.embedding_gateway import EmbeddingGateway
from moonshine.services.graph import GraphMaterializer
from moonshine.services.mashes import MashService
from moonshine.services.retrieval import RetrievalEngine
from moonshine.services.settings import SettingsReader
from moonshine.utils.logger import get_logger

logger = get_logger(__name__)


class MoonshineEngine:
    """
    Unified engine integrating storage, retrieval and graph services.
    """

    def __init__(
        self,
        config: Config,
        store: GraphStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize Moonshine engine.

        Args:
            config: Configuration object
            store: Knowledge store (default: built from config)
            transport: Optional httpx transport for embedding providers
        """
        self.config = config
        self.store = store or GraphStoreFactory.create(config)

        self.settings = SettingsReader(self.store)
        self.gateway = EmbeddingGateway(self.settings, config.embedder, transport=transport)

        self.mashes = MashService(self.store)
        self.graph = GraphMaterializer(self.store)
        self.retrieval = RetrievalEngine(self.store, self.gateway, self.settings)

    @property
    def read_only(self) -> bool:
        return self.store.read_only

    async def initialize(self) -> None:
        """Open the store."""
        logger.info("Initializing Moonshine engine")
        await self.store.initialize()
        logger.info("Moonshine engine ready")

    async def close(self) -> None:
        """Release the store connection."""
        await self.store.close()

    async def __aenter__(self) -> "MoonshineEngine":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
