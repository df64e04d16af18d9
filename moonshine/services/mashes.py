"""
Mash CRUD and statistics.
"""

from typing import Any

from moonshine.core.graph_store.base import GraphStore
from moonshine.models.mash import Mash, MashStatus, MashType
from moonshine.utils.exceptions import NotFoundError, ReadOnlyError, ValidationError
from moonshine.utils.id_generator import generate_mash_id, now_ms
from moonshine.utils.logger import get_logger

logger = get_logger(__name__)


class MashService:
    """Create, read, update and delete mashes."""

    def __init__(self, store: GraphStore):
        self.store = store

    async def get_stats(self) -> dict[str, Any]:
        """Mash counts by status and type, plus the edge count."""
        return {
            "total_mashes": await self.store.count_mashes(),
            "by_status": await self.store.count_mashes_by("status"),
            "by_type": await self.store.count_mashes_by("type"),
            "total_edges": await self.store.count_edges(),
        }

    async def list_mashes(
        self,
        status: MashStatus | None = None,
        mash_type: MashType | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Mash]:
        """List mashes newest first."""
        return await self.store.list_mashes(
            status=status, mash_type=mash_type, limit=limit, offset=offset
        )

    async def get_mash(self, mash_id: str) -> Mash:
        """
        Get a single mash.

        Raises:
            NotFoundError: If the mash doesn't exist
        """
        mash = await self.store.get_mash(mash_id)
        if mash is None:
            raise NotFoundError(f"Mash not found: {mash_id}")
        return mash

    async def create_mash(
        self, mash_type: MashType, summary: str, context: str = "", memo: str = ""
    ) -> Mash:
        """
        Create a mash in the initial MASH_TUN status.

        Raises:
            ReadOnlyError: If the database is read-only
            ValidationError: If summary is empty
        """
        self._require_writable("Cannot create")

        if not summary:
            raise ValidationError("Summary cannot be empty")

        now = now_ms()
        mash = Mash(
            id=generate_mash_id(),
            type=mash_type,
            status=MashStatus.MASH_TUN,
            summary=summary,
            context=context,
            memo=memo,
            created_at=now,
            updated_at=now,
        )
        await self.store.insert_mash(mash)
        logger.info(f"Created mash {mash.id}")

        return await self.get_mash(mash.id)

    async def update_mash(
        self,
        mash_id: str,
        mash_type: MashType | None = None,
        summary: str | None = None,
        context: str | None = None,
        memo: str | None = None,
    ) -> Mash:
        """
        Partially update a mash.

        Raises:
            ReadOnlyError: If the database is read-only
            NotFoundError: If the mash doesn't exist
            ValidationError: If nothing was supplied or summary is empty
        """
        self._require_writable("Cannot update")

        if not await self.store.mash_exists(mash_id):
            raise NotFoundError(f"Mash not found: {mash_id}")

        fields: dict[str, Any] = {}
        if mash_type is not None:
            fields["type"] = mash_type
        if summary is not None:
            if not summary:
                raise ValidationError("Summary cannot be empty")
            fields["summary"] = summary
        if context is not None:
            fields["context"] = context
        if memo is not None:
            fields["memo"] = memo

        if not fields:
            raise ValidationError("No fields to update")

        await self.store.update_mash(mash_id, fields, now_ms())
        return await self.get_mash(mash_id)

    async def delete_mash(self, mash_id: str) -> None:
        """
        Delete a mash and its edges.

        Raises:
            ReadOnlyError: If the database is read-only
            NotFoundError: If the mash doesn't exist
        """
        self._require_writable("Cannot delete")

        if not await self.store.mash_exists(mash_id):
            raise NotFoundError(f"Mash not found: {mash_id}")

        await self.store.delete_mash(mash_id)
        logger.info(f"Deleted mash {mash_id}")

    def _require_writable(self, action: str) -> None:
        if self.store.read_only:
            raise ReadOnlyError(f"{action}: database is in read-only mode")
