"""
Shared test fixtures.

Every test gets a fresh SQLite database under ``tmp_path``. Rows that the
desktop app normally owns (statuses, embeddings, settings) are written
directly through ``StoreSeeder``.
"""

from collections.abc import AsyncGenerator, Sequence
from dataclasses import dataclass

import pytest

from moonshine.config import Config, StorageConfig
from moonshine.core.graph_store.sqlite_store import SQLiteGraphStore
from moonshine.core.vectors import encode_embedding
from moonshine.models.edge import EdgeSource, RelationType
from moonshine.models.mash import MashStatus, MashType
from moonshine.services.engine import MoonshineEngine
from moonshine.utils.id_generator import generate_mash_id, now_ms


class StoreSeeder:
    """Writes fixture rows straight into the database."""

    def __init__(self, store: SQLiteGraphStore):
        self.store = store

    async def mash(
        self,
        summary: str,
        mash_type: MashType = MashType.INSIGHT,
        status: MashStatus = MashStatus.JARRED,
        context: str = "",
        memo: str = "",
        embedding: Sequence[float] | bytes | None = None,
        created_at: int | None = None,
    ) -> str:
        mash_id = generate_mash_id()
        now = created_at if created_at is not None else now_ms()
        if embedding is not None and not isinstance(embedding, bytes):
            embedding = encode_embedding(embedding)

        await self.store.db.execute(
            """
            INSERT INTO mashes (id, type, status, summary, context, memo, created_at, updated_at, embedding)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (mash_id, mash_type.value, status.value, summary, context, memo, now, now, embedding),
        )
        await self.store.db.commit()
        return mash_id

    async def edge(
        self,
        source_id: str,
        target_id: str,
        relation_type: RelationType = RelationType.RELATED_TO,
        source: EdgeSource = EdgeSource.HUMAN,
        confidence: float = 0.5,
    ) -> int:
        now = now_ms()
        cursor = await self.store.db.execute(
            """
            INSERT INTO edges (source_id, target_id, relation_type, source, confidence, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (source_id, target_id, relation_type.value, source.value, confidence, now, now),
        )
        await self.store.db.commit()
        return cursor.lastrowid

    async def setting(self, key: str, value: str) -> None:
        await self.store.db.execute(
            "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)", (key, value)
        )
        await self.store.db.commit()


@dataclass
class ReadOnlyFixture:
    """Read-only store over a database seeded with two mashes and one edge."""

    store: SQLiteGraphStore
    engine: MoonshineEngine
    source_id: str
    target_id: str
    edge_id: int


def make_config(db_path: str, read_only: bool = False) -> Config:
    return Config(
        storage=StorageConfig(db_path=db_path, read_only=read_only, create_if_missing=not read_only)
    )


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "moonshine.db")


@pytest.fixture
async def store(db_path) -> AsyncGenerator[SQLiteGraphStore, None]:
    """Writable store on a fresh database."""
    store = SQLiteGraphStore(db_path, create_if_missing=True)
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def seed(store) -> StoreSeeder:
    return StoreSeeder(store)


@pytest.fixture
def engine(store, db_path) -> MoonshineEngine:
    """Engine sharing the writable store fixture."""
    return MoonshineEngine(make_config(db_path), store=store)


@pytest.fixture
async def read_only(db_path) -> AsyncGenerator[ReadOnlyFixture, None]:
    """Seed a database, then reopen it read-only."""
    writer = SQLiteGraphStore(db_path, create_if_missing=True)
    await writer.initialize()
    seeder = StoreSeeder(writer)
    source_id = await seeder.mash("읽기전용 원본노트", mash_type=MashType.PROBLEM)
    target_id = await seeder.mash("읽기전용 대상노트")
    edge_id = await seeder.edge(source_id, target_id)
    await writer.close()

    store = SQLiteGraphStore(db_path, read_only=True)
    await store.initialize()
    engine = MoonshineEngine(make_config(db_path, read_only=True), store=store)
    yield ReadOnlyFixture(store, engine, source_id, target_id, edge_id)
    await store.close()
