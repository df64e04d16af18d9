"""
SQLite schema shared with the Moonshine desktop application.

Only applied to databases that do not have a ``mashes`` table yet; an
existing database keeps whatever schema and triggers its owner created.
"""

SCHEMA = """
CREATE TABLE IF NOT EXISTS mashes (
    id TEXT PRIMARY KEY,
    type TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'MASH_TUN',
    summary TEXT NOT NULL,
    context TEXT NOT NULL DEFAULT '',
    memo TEXT NOT NULL DEFAULT '',
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL,
    embedding BLOB
);

CREATE INDEX IF NOT EXISTS idx_mashes_status ON mashes(status);
CREATE INDEX IF NOT EXISTS idx_mashes_type ON mashes(type);
CREATE INDEX IF NOT EXISTS idx_mashes_created ON mashes(created_at);

CREATE TABLE IF NOT EXISTS edges (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    source_id TEXT NOT NULL,
    target_id TEXT NOT NULL,
    relation_type TEXT NOT NULL,
    source TEXT NOT NULL DEFAULT 'human',
    confidence REAL NOT NULL DEFAULT 0,
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL,
    UNIQUE (source_id, target_id),
    FOREIGN KEY (source_id) REFERENCES mashes(id) ON DELETE CASCADE,
    FOREIGN KEY (target_id) REFERENCES mashes(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_edges_source ON edges(source_id);
CREATE INDEX IF NOT EXISTS idx_edges_target ON edges(target_id);

CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);

CREATE VIRTUAL TABLE IF NOT EXISTS mashes_fts USING fts5(
    summary,
    context,
    memo,
    content='mashes',
    content_rowid='rowid',
    tokenize='trigram'
);

CREATE TRIGGER IF NOT EXISTS mashes_fts_insert AFTER INSERT ON mashes BEGIN
    INSERT INTO mashes_fts(rowid, summary, context, memo)
    VALUES (new.rowid, new.summary, new.context, new.memo);
END;

CREATE TRIGGER IF NOT EXISTS mashes_fts_delete AFTER DELETE ON mashes BEGIN
    INSERT INTO mashes_fts(mashes_fts, rowid, summary, context, memo)
    VALUES ('delete', old.rowid, old.summary, old.context, old.memo);
END;

CREATE TRIGGER IF NOT EXISTS mashes_fts_update AFTER UPDATE OF summary, context, memo ON mashes BEGIN
    INSERT INTO mashes_fts(mashes_fts, rowid, summary, context, memo)
    VALUES ('delete', old.rowid, old.summary, old.context, old.memo);
    INSERT INTO mashes_fts(rowid, summary, context, memo)
    VALUES (new.rowid, new.summary, new.context, new.memo);
END;
"""
