"""
Tests for the SQLite knowledge store.
"""

import sqlite3

import pytest

from moonshine.core.graph_store.sqlite_store import SQLiteGraphStore
from moonshine.models.edge import EdgeSource, RelationType
from moonshine.models.mash import MashStatus, MashType
from moonshine.utils.exceptions import StoreError, ValidationError


class TestLifecycle:
    """Test opening and closing the database."""

    async def test_missing_database(self, tmp_path):
        """Test a missing file is a store error naming the override variable."""
        store = SQLiteGraphStore(str(tmp_path / "absent.db"))

        with pytest.raises(StoreError, match="MOONSHINE_DB_PATH"):
            await store.initialize()

        assert not (tmp_path / "absent.db").exists()

    async def test_missing_database_read_only(self, tmp_path):
        """Test read-only mode never creates a database."""
        store = SQLiteGraphStore(str(tmp_path / "absent.db"), read_only=True, create_if_missing=True)

        with pytest.raises(StoreError, match="Database not found"):
            await store.initialize()

    async def test_create_if_missing(self, tmp_path):
        """Test schema creation on a new database."""
        path = tmp_path / "nested" / "new.db"
        store = SQLiteGraphStore(str(path), create_if_missing=True)
        await store.initialize()
        try:
            cursor = await store.db.execute(
                "SELECT name FROM sqlite_master WHERE type IN ('table', 'trigger') ORDER BY name"
            )
            names = {row[0] for row in await cursor.fetchall()}
        finally:
            await store.close()

        assert path.exists()
        assert {"mashes", "edges", "settings", "mashes_fts", "mashes_fts_insert"} <= names

    async def test_pragmas(self, store):
        """Test foreign keys and WAL are enabled on writable connections."""
        cursor = await store.db.execute("PRAGMA foreign_keys")
        assert (await cursor.fetchone())[0] == 1

        cursor = await store.db.execute("PRAGMA journal_mode")
        assert (await cursor.fetchone())[0].lower() == "wal"

    async def test_db_property_requires_connection(self, tmp_path):
        """Test using the store before initialize is a store error."""
        store = SQLiteGraphStore(str(tmp_path / "x.db"))
        with pytest.raises(StoreError, match="not open"):
            _ = store.db

    async def test_close_is_idempotent(self, store):
        """Test closing twice is harmless."""
        await store.close()
        await store.close()
        assert store.connection is None

    async def test_read_only_rejects_writes(self, read_only):
        """Test the read-only connection refuses writes at the SQLite level."""
        with pytest.raises(sqlite3.OperationalError):
            await read_only.store.db.execute("DELETE FROM edges")


class TestMashes:
    """Test mash rows."""

    async def test_get_mash(self, store, seed):
        """Test reading a mash back."""
        mash_id = await seed.mash(
            "데이터베이스 선택", mash_type=MashType.DECISION, context="SQLite vs Postgres"
        )

        mash = await store.get_mash(mash_id)

        assert mash.id == mash_id
        assert mash.type == MashType.DECISION
        assert mash.status == MashStatus.JARRED
        assert mash.context == "SQLite vs Postgres"

    async def test_get_missing(self, store):
        """Test missing mash is None."""
        assert await store.get_mash("nope") is None
        assert await store.mash_exists("nope") is False

    async def test_list_newest_first(self, store, seed):
        """Test ordering by created_at descending with pagination."""
        old = await seed.mash("oldest", created_at=1_000)
        mid = await seed.mash("middle", created_at=2_000)
        new = await seed.mash("newest", created_at=3_000)

        assert [m.id for m in await store.list_mashes()] == [new, mid, old]
        assert [m.id for m in await store.list_mashes(limit=1, offset=1)] == [mid]

    async def test_list_filters(self, store, seed):
        """Test status and type filters combine."""
        match = await seed.mash("a", mash_type=MashType.QUESTION, status=MashStatus.ON_STILL)
        await seed.mash("b", mash_type=MashType.QUESTION, status=MashStatus.JARRED)
        await seed.mash("c", mash_type=MashType.INSIGHT, status=MashStatus.ON_STILL)

        result = await store.list_mashes(status=MashStatus.ON_STILL, mash_type=MashType.QUESTION)

        assert [m.id for m in result] == [match]

    async def test_update_rejects_unknown_column(self, store, seed):
        """Test partial updates are limited to known columns."""
        mash_id = await seed.mash("x")
        with pytest.raises(ValidationError, match="embedding"):
            await store.update_mash(mash_id, {"embedding": b"1234"}, updated_at=1)

    async def test_counts(self, store, seed):
        """Test grouped counts."""
        await seed.mash("a", mash_type=MashType.PROBLEM, status=MashStatus.JARRED)
        await seed.mash("b", mash_type=MashType.PROBLEM, status=MashStatus.MASH_TUN)
        await seed.mash("c", mash_type=MashType.INSIGHT, status=MashStatus.JARRED)

        assert await store.count_mashes() == 3
        assert await store.count_mashes_by("status") == {"JARRED": 2, "MASH_TUN": 1}
        assert await store.count_mashes_by("type") == {"문제": 2, "인사이트": 1}

        with pytest.raises(ValidationError):
            await store.count_mashes_by("summary; DROP TABLE mashes")


class TestEdges:
    """Test edge rows."""

    async def test_upsert_keeps_identity(self, store, seed):
        """Test a second upsert on the same ordered pair overwrites values only."""
        a = await seed.mash("a")
        b = await seed.mash("b")

        first = await store.upsert_edge(
            a, b, RelationType.RELATED_TO, EdgeSource.AI, confidence=0.2, now=1_000
        )
        second = await store.upsert_edge(
            a, b, RelationType.SUPPORTS, EdgeSource.HUMAN, confidence=0.9, now=2_000
        )

        assert second.id == first.id
        assert second.created_at == 1_000
        assert second.updated_at == 2_000
        assert second.relation_type == RelationType.SUPPORTS
        assert second.source == EdgeSource.HUMAN
        assert second.confidence == 0.9
        assert await store.count_edges() == 1

    async def test_reverse_pair_is_distinct(self, store, seed):
        """Test (a, b) and (b, a) are separate edges."""
        a = await seed.mash("a")
        b = await seed.mash("b")

        await store.upsert_edge(a, b, RelationType.RELATED_TO, EdgeSource.HUMAN, 0.0, now=1)
        await store.upsert_edge(b, a, RelationType.RELATED_TO, EdgeSource.HUMAN, 0.0, now=1)

        assert await store.count_edges() == 2

    async def test_cascade_delete(self, store, seed):
        """Test deleting a mash removes its edges."""
        a = await seed.mash("a")
        b = await seed.mash("b")
        c = await seed.mash("c")
        await seed.edge(a, b)
        await seed.edge(c, a)
        kept = await seed.edge(b, c)

        await store.delete_mash(a)

        assert await store.count_edges() == 1
        assert await store.get_edge(kept) is not None

    async def test_update_edge_columns(self, store, seed):
        """Test partial edge update."""
        a = await seed.mash("a")
        b = await seed.mash("b")
        edge_id = await seed.edge(a, b, confidence=0.1)

        await store.update_edge(edge_id, {"confidence": 0.7}, updated_at=5)
        edge = await store.get_edge(edge_id)

        assert edge.confidence == 0.7
        assert edge.updated_at == 5
        assert edge.relation_type == RelationType.RELATED_TO

        with pytest.raises(ValidationError):
            await store.update_edge(edge_id, {"source_id": b}, updated_at=6)


class TestKeywordSearch:
    """Test FTS5 trigram search."""

    async def test_korean_substring(self, store, seed):
        """Test trigram matching inside Korean words."""
        hit = await seed.mash("데이터베이스 마이그레이션 결정")
        await seed.mash("회의록 정리")

        results = await store.keyword_search("마이그레")

        assert [m.id for m in results] == [hit]

    async def test_matches_context_and_memo(self, store, seed):
        """Test all three text columns are indexed."""
        in_context = await seed.mash("a", context="websocket reconnect")
        in_memo = await seed.mash("b", memo="reconnect backoff")

        ids = {m.id for m in await store.keyword_search("reconnect")}

        assert ids == {in_context, in_memo}

    async def test_limit(self, store, seed):
        """Test the limit is enforced by the query."""
        for i in range(5):
            await seed.mash(f"cache strategy {i}")

        assert len(await store.keyword_search("strategy", limit=3)) == 3

    async def test_index_follows_updates_and_deletes(self, store, seed):
        """Test triggers keep the index in sync."""
        mash_id = await seed.mash("initial wording")

        await store.update_mash(mash_id, {"summary": "revised wording"}, updated_at=2)
        assert await store.keyword_search("initial") == []
        assert [m.id for m in await store.keyword_search("revised")] == [mash_id]

        await store.delete_mash(mash_id)
        assert await store.keyword_search("revised") == []

    async def test_invalid_query(self, store, seed):
        """Test FTS syntax errors become validation errors."""
        await seed.mash("anything")

        with pytest.raises(ValidationError, match="Invalid search query"):
            await store.keyword_search('"unterminated')

    async def test_invalid_operator(self, store, seed):
        """Test a dangling boolean operator is a validation error."""
        await seed.mash("anything")

        with pytest.raises(ValidationError, match="Invalid search query"):
            await store.keyword_search("anything AND")

    async def test_missing_index_is_store_error(self, store, seed):
        """Test storage faults are not reported as bad queries."""
        await seed.mash("anything")
        await store.db.execute("DROP TABLE mashes_fts")
        await store.db.commit()

        with pytest.raises(StoreError, match="no such table: mashes_fts"):
            await store.keyword_search("anything")


class TestEmbeddingsAndSettings:
    """Test semantic search candidates and settings."""

    async def test_only_embedded_mashes(self, store, seed):
        """Test mashes without embeddings are not candidates."""
        first = await seed.mash("first", embedding=[1.0, 0.0])
        await seed.mash("no vector")
        second = await seed.mash("second", embedding=[0.0, 1.0])

        candidates = await store.get_embedded_mashes()

        assert [c.id for c in candidates] == [first, second]
        assert len(candidates[0].embedding) == 8

    async def test_get_setting(self, store, seed):
        """Test reading settings."""
        await seed.setting("embedding_provider", "gemini")

        assert await store.get_setting("embedding_provider") == "gemini"
        assert await store.get_setting("missing") is None
