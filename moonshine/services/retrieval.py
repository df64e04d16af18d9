"""
Retrieval engine: keyword search and semantic search.

The two modes share no ranking logic. Keyword search trusts the FTS5
index rank. Semantic search is a full scan with cosine similarity: there
is no nearest-neighbour index, so cost grows linearly with the number of
embedded mashes. That is acceptable for a personal knowledge base of a few
thousand entries; a larger corpus would need an ANN index.
"""

from moonshine.core.graph_store.base import GraphStore
from moonshine.core.vectors import cosine_similarity, decode_embedding
from moonshine.models.mash import EmbeddedMash, Mash
from moonshine.models.search import SimilarResult
from moonshine.services.embedding_gateway import EmbeddingGateway
from moonshine.services.settings import SettingsReader
from moonshine.utils.exceptions import EmbeddingError, MoonshineError, ValidationError
from moonshine.utils.logger import get_logger

logger = get_logger(__name__)

SIMILARITY_DECIMALS = 4


class RetrievalEngine:
    """
    Hybrid retrieval over mashes.

    Features:
    - Keyword search via the trigram full-text index
    - Semantic search via query embedding + cosine similarity
    """

    def __init__(self, store: GraphStore, gateway: EmbeddingGateway, settings: SettingsReader):
        self.store = store
        self.gateway = gateway
        self.settings = settings

    async def search_keyword(self, query: str, limit: int = 20) -> list[Mash]:
        """
        Full-text keyword search.

        Args:
            query: FTS5 match expression
            limit: Maximum number of results (enforced by the query)

        Returns:
            Mashes in index rank order
        """
        if not query or not query.strip():
            raise ValidationError("Search query cannot be empty")

        return await self.store.keyword_search(query, limit)

    async def search_semantic(
        self,
        query: str,
        threshold: float | None = None,
        top_k: int | None = None,
    ) -> list[SimilarResult]:
        """
        Semantic search by embedding cosine similarity.

        Call-time threshold/top_k override the stored defaults. Candidates are
        filtered on the unrounded similarity and sorted descending; equal
        scores keep storage (rowid) order.

        Args:
            query: Search text
            threshold: Minimum similarity (default from settings)
            top_k: Maximum number of results (default from settings)

        Returns:
            Results with similarity rounded to 4 decimals

        Raises:
            MoonshineError: If the query embedding cannot be generated; no
                candidates are scanned in that case
        """
        if not query or not query.strip():
            raise ValidationError("Search query cannot be empty")

        defaults = await self.settings.search_settings()
        effective_threshold = defaults.threshold if threshold is None else threshold
        effective_top_k = defaults.top_k if top_k is None else top_k

        try:
            query_vector = await self.gateway.embed(query)
        except MoonshineError as e:
            logger.error(f"Embedding generation failed: {e.message}")
            raise type(e)(f"Embedding generation failed: {e.message}", e.context) from e
        except Exception as e:
            logger.exception(f"Embedding generation failed: {e}")
            raise EmbeddingError(f"Embedding generation failed: {e}") from e

        candidates = await self.store.get_embedded_mashes()

        scored: list[tuple[float, EmbeddedMash]] = []
        for candidate in candidates:
            if len(candidate.embedding) % 4:
                logger.warning(
                    f"Skipping mash {candidate.id}: embedding of {len(candidate.embedding)} "
                    "bytes is not a float32 sequence"
                )
                continue

            similarity = cosine_similarity(query_vector, decode_embedding(candidate.embedding))
            if similarity >= effective_threshold:
                scored.append((similarity, candidate))

        # list.sort is stable, so ties stay in scan order
        scored.sort(key=lambda item: item[0], reverse=True)

        logger.debug(
            f"Semantic search scanned {len(candidates)} candidates, "
            f"{len(scored)} above threshold {effective_threshold}"
        )

        return [
            SimilarResult(
                id=candidate.id,
                type=candidate.type,
                summary=candidate.summary,
                context=candidate.context,
                memo=candidate.memo,
                similarity=round(similarity, SIMILARITY_DECIMALS),
            )
            for similarity, candidate in scored[:effective_top_k]
        ]
