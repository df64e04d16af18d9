"""
SQLite knowledge store implementation using aiosqlite.

The database is normally created and owned by the Moonshine desktop app;
this store reads it, edits mashes and edges, and never writes embeddings
or settings.
"""

import sqlite3
from enum import Enum
from pathlib import Path
from typing import Any

import aiosqlite

from moonshine.core.graph_store.base import GraphStore
from moonshine.core.graph_store.schema import SCHEMA
from moonshine.models.edge import Edge, GraphEdge
from moonshine.models.mash import EmbeddedMash, GraphNode, Mash, MashStatus
from moonshine.utils.exceptions import StoreError, ValidationError
from moonshine.utils.logger import get_logger

logger = get_logger(__name__)

MASH_COLUMNS = "id, type, status, summary, context, memo, created_at, updated_at"
NODE_COLUMNS = "id, type, summary, context, memo, created_at, updated_at"
EDGE_COLUMNS = "id, source_id, target_id, relation_type, source, confidence, created_at, updated_at"
GRAPH_EDGE_COLUMNS = "id, source_id, target_id, relation_type, source, confidence"

# Columns that partial updates may touch
MASH_UPDATABLE = ("type", "status", "summary", "context", "memo")
EDGE_UPDATABLE = ("relation_type", "source", "confidence")
MASH_GROUPABLE = ("status", "type")


def _placeholders(values: list[Any]) -> str:
    return ", ".join("?" for _ in values)


def _param(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


FTS_QUERY_ERRORS = ("fts5:", "syntax error", "unterminated string", "unknown special query")


def _is_fts_query_error(error: sqlite3.OperationalError) -> bool:
    """True when the MATCH expression itself was rejected by the FTS5 parser."""
    message = str(error).lower()
    return any(marker in message for marker in FTS_QUERY_ERRORS)


class SQLiteGraphStore(GraphStore):
    """
    SQLite-based knowledge store for mashes and edges.

    Features:
    - Single connection owned for the process lifetime
    - Read-only mode (opened with ``mode=ro``)
    - FTS5 trigram keyword search
    - Cascading edge deletion via foreign keys
    """

    def __init__(
        self,
        db_path: str,
        read_only: bool = False,
        create_if_missing: bool = False,
        busy_timeout_ms: int = 5000,
    ):
        """
        Initialize SQLite knowledge store.

        Args:
            db_path: Path to SQLite database file
            read_only: Open the database read-only
            create_if_missing: Create a new database (and schema) if the file is absent
            busy_timeout_ms: SQLite busy timeout
        """
        self.db_path = db_path
        self.read_only = read_only
        self.create_if_missing = create_if_missing
        self.busy_timeout_ms = busy_timeout_ms
        self.connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the connection to SQLite."""
        if self.connection is not None:
            return

        path = Path(self.db_path)
        if not path.exists():
            if self.read_only or not self.create_if_missing:
                raise StoreError(
                    f"Database not found at: {path}. Set MOONSHINE_DB_PATH to override."
                )
            path.parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Opening database at: {path}")
        try:
            if self.read_only:
                self.connection = await aiosqlite.connect(
                    f"{path.resolve().as_uri()}?mode=ro", uri=True
                )
            else:
                self.connection = await aiosqlite.connect(str(path))
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open database at {path}: {e}") from e

        self.connection.row_factory = aiosqlite.Row
        if not self.read_only:
            await self.connection.execute("PRAGMA journal_mode = WAL")
        await self.connection.execute(f"PRAGMA busy_timeout = {int(self.busy_timeout_ms)}")
        await self.connection.execute("PRAGMA foreign_keys = ON")

        logger.info(f"Database opened (readonly={self.read_only})")

    async def initialize(self) -> None:
        """Connect and create the schema when the database has none."""
        await self.connect()

        if self.read_only:
            return

        cursor = await self.db.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'mashes'"
        )
        if await cursor.fetchone() is None:
            logger.info("Creating Moonshine schema")
            await self.db.executescript(SCHEMA)
            await self.db.commit()

    @property
    def db(self) -> aiosqlite.Connection:
        """The open connection."""
        if self.connection is None:
            raise StoreError("Database is not open")
        return self.connection

    async def close(self) -> None:
        """Close the connection."""
        if self.connection is not None:
            await self.connection.close()
            self.connection = None
            logger.info("Database closed")

    async def _fetchall(self, query: str, params: list[Any] | tuple = ()) -> list[aiosqlite.Row]:
        cursor = await self.db.execute(query, params)
        return list(await cursor.fetchall())

    async def _fetchone(self, query: str, params: list[Any] | tuple = ()) -> aiosqlite.Row | None:
        cursor = await self.db.execute(query, params)
        return await cursor.fetchone()

    async def _write(self, query: str, params: list[Any] | tuple = ()) -> None:
        await self.db.execute(query, params)
        await self.db.commit()

    # ═══════════════════════════════════════════════════════════
    # MASH OPERATIONS
    # ═══════════════════════════════════════════════════════════

    async def insert_mash(self, mash: Mash) -> None:
        """Insert a new mash row."""
        await self._write(
            f"INSERT INTO mashes ({MASH_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                mash.id,
                mash.type.value,
                mash.status.value,
                mash.summary,
                mash.context,
                mash.memo,
                mash.created_at,
                mash.updated_at,
            ),
        )

    async def get_mash(self, mash_id: str) -> Mash | None:
        """Retrieve a mash by ID."""
        row = await self._fetchone(f"SELECT {MASH_COLUMNS} FROM mashes WHERE id = ?", (mash_id,))
        return Mash(**dict(row)) if row else None

    async def mash_exists(self, mash_id: str) -> bool:
        """Check whether a mash exists."""
        row = await self._fetchone("SELECT id FROM mashes WHERE id = ?", (mash_id,))
        return row is not None

    async def list_mashes(
        self,
        status: str | None = None,
        mash_type: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Mash]:
        """List mashes newest first."""
        conditions = []
        params: list[Any] = []

        if status:
            conditions.append("status = ?")
            params.append(_param(status))
        if mash_type:
            conditions.append("type = ?")
            params.append(_param(mash_type))

        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        query = (
            f"SELECT {MASH_COLUMNS} FROM mashes {where} "
            "ORDER BY created_at DESC LIMIT ? OFFSET ?"
        )
        params.extend([limit, offset])

        rows = await self._fetchall(query, params)
        return [Mash(**dict(row)) for row in rows]

    async def update_mash(self, mash_id: str, fields: dict[str, Any], updated_at: int) -> None:
        """Partially update a mash."""
        unknown = set(fields) - set(MASH_UPDATABLE)
        if unknown:
            raise ValidationError(f"Cannot update mash columns: {', '.join(sorted(unknown))}")

        sets = [f"{column} = ?" for column in fields]
        params = [_param(value) for value in fields.values()]
        sets.append("updated_at = ?")
        params.extend([updated_at, mash_id])

        await self._write(f"UPDATE mashes SET {', '.join(sets)} WHERE id = ?", params)

    async def delete_mash(self, mash_id: str) -> None:
        """Delete a mash and (by cascade) its edges."""
        await self._write("DELETE FROM mashes WHERE id = ?", (mash_id,))

    async def count_mashes(self) -> int:
        """Count all mashes."""
        row = await self._fetchone("SELECT COUNT(*) FROM mashes")
        return row[0] if row else 0

    async def count_mashes_by(self, column: str) -> dict[str, int]:
        """Count mashes grouped by status or type."""
        if column not in MASH_GROUPABLE:
            raise ValidationError(f"Cannot group mashes by: {column}")

        rows = await self._fetchall(
            f"SELECT {column}, COUNT(*) AS count FROM mashes GROUP BY {column}"
        )
        return {row[column]: row["count"] for row in rows}

    # ═══════════════════════════════════════════════════════════
    # EDGE OPERATIONS
    # ═══════════════════════════════════════════════════════════

    async def upsert_edge(
        self,
        source_id: str,
        target_id: str,
        relation_type: str,
        source: str,
        confidence: float,
        now: int,
    ) -> Edge:
        """Insert an edge or overwrite the one with the same ordered endpoints."""
        await self._write(
            """
            INSERT INTO edges (source_id, target_id, relation_type, source, confidence, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(source_id, target_id)
            DO UPDATE SET relation_type = excluded.relation_type,
                          source = excluded.source,
                          confidence = excluded.confidence,
                          updated_at = excluded.updated_at
            """,
            (
                source_id,
                target_id,
                _param(relation_type),
                _param(source),
                confidence,
                now,
                now,
            ),
        )

        row = await self._fetchone(
            f"SELECT {EDGE_COLUMNS} FROM edges WHERE source_id = ? AND target_id = ?",
            (source_id, target_id),
        )
        return Edge(**dict(row))

    async def get_edge(self, edge_id: int) -> Edge | None:
        """Retrieve an edge by ID."""
        row = await self._fetchone(f"SELECT {EDGE_COLUMNS} FROM edges WHERE id = ?", (edge_id,))
        return Edge(**dict(row)) if row else None

    async def update_edge(self, edge_id: int, fields: dict[str, Any], updated_at: int) -> None:
        """Partially update an edge."""
        unknown = set(fields) - set(EDGE_UPDATABLE)
        if unknown:
            raise ValidationError(f"Cannot update edge columns: {', '.join(sorted(unknown))}")

        sets = [f"{column} = ?" for column in fields]
        params = [_param(value) for value in fields.values()]
        sets.append("updated_at = ?")
        params.extend([updated_at, edge_id])

        await self._write(f"UPDATE edges SET {', '.join(sets)} WHERE id = ?", params)

    async def delete_edge(self, edge_id: int) -> None:
        """Delete an edge."""
        await self._write("DELETE FROM edges WHERE id = ?", (edge_id,))

    async def count_edges(self) -> int:
        """Count all edges."""
        row = await self._fetchone("SELECT COUNT(*) FROM edges")
        return row[0] if row else 0

    # ═══════════════════════════════════════════════════════════
    # GRAPH VIEWS
    # ═══════════════════════════════════════════════════════════

    async def get_nodes_by_status(
        self, status: MashStatus, mash_types: list[str] | None = None
    ) -> list[GraphNode]:
        """Graph nodes with the given status."""
        query = f"SELECT {NODE_COLUMNS} FROM mashes WHERE status = ?"
        params: list[Any] = [_param(status)]

        if mash_types:
            query += f" AND type IN ({_placeholders(mash_types)})"
            params.extend(_param(t) for t in mash_types)

        rows = await self._fetchall(query, params)
        return [GraphNode(**dict(row)) for row in rows]

    async def get_edges_between_status(
        self,
        status: MashStatus,
        relation_types: list[str] | None = None,
        sources: list[str] | None = None,
    ) -> list[GraphEdge]:
        """Edges whose endpoints both have the given status."""
        query = f"""
            SELECT {GRAPH_EDGE_COLUMNS} FROM edges
            WHERE source_id IN (SELECT id FROM mashes WHERE status = ?)
              AND target_id IN (SELECT id FROM mashes WHERE status = ?)
        """
        params: list[Any] = [_param(status), _param(status)]

        if relation_types:
            query += f" AND relation_type IN ({_placeholders(relation_types)})"
            params.extend(_param(t) for t in relation_types)

        if sources:
            query += f" AND source IN ({_placeholders(sources)})"
            params.extend(_param(s) for s in sources)

        rows = await self._fetchall(query, params)
        return [GraphEdge(**dict(row)) for row in rows]

    async def get_graph_node(self, node_id: str) -> GraphNode | None:
        """Single graph node by ID."""
        row = await self._fetchone(f"SELECT {NODE_COLUMNS} FROM mashes WHERE id = ?", (node_id,))
        return GraphNode(**dict(row)) if row else None

    async def get_graph_nodes(self, node_ids: list[str]) -> list[GraphNode]:
        """Graph nodes for a set of IDs."""
        if not node_ids:
            return []

        rows = await self._fetchall(
            f"SELECT {NODE_COLUMNS} FROM mashes WHERE id IN ({_placeholders(node_ids)})",
            node_ids,
        )
        return [GraphNode(**dict(row)) for row in rows]

    async def get_edges_touching(self, node_id: str) -> list[GraphEdge]:
        """All edges where the node is source or target."""
        rows = await self._fetchall(
            f"SELECT {GRAPH_EDGE_COLUMNS} FROM edges WHERE source_id = ? OR target_id = ?",
            (node_id, node_id),
        )
        return [GraphEdge(**dict(row)) for row in rows]

    # ═══════════════════════════════════════════════════════════
    # SEARCH & SETTINGS
    # ═══════════════════════════════════════════════════════════

    async def keyword_search(self, query: str, limit: int = 20) -> list[Mash]:
        """FTS5 trigram match ordered by rank."""
        try:
            rows = await self._fetchall(
                """
                SELECT m.id, m.type, m.status, m.summary, m.context, m.memo, m.created_at, m.updated_at
                FROM mashes_fts fts
                JOIN mashes m ON m.rowid = fts.rowid
                WHERE mashes_fts MATCH ?
                ORDER BY rank
                LIMIT ?
                """,
                (query, limit),
            )
        except sqlite3.OperationalError as e:
            if _is_fts_query_error(e):
                raise ValidationError(f"Invalid search query: {e}") from e
            raise StoreError(f"Keyword search failed: {e}") from e

        return [Mash(**dict(row)) for row in rows]

    async def get_embedded_mashes(self) -> list[EmbeddedMash]:
        """All mashes that carry an embedding, in rowid order."""
        rows = await self._fetchall(
            """
            SELECT id, type, summary, context, memo, embedding
            FROM mashes WHERE embedding IS NOT NULL
            ORDER BY rowid
            """
        )
        return [EmbeddedMash(**dict(row)) for row in rows]

    async def get_setting(self, key: str) -> str | None:
        """Read one value from the settings table."""
        row = await self._fetchone("SELECT value FROM settings WHERE key = ?", (key,))
        return row["value"] if row else None
