"""SQLite database connection management and schema migrations."""

from __future__ import annotations

import logging
from pathlib import Path

import aiosqlite

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS scans (
    id TEXT PRIMARY KEY,
    target TEXT NOT NULL,
    level TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'pending',
    findings TEXT NOT NULL DEFAULT '[]',
    metrics TEXT,
    error_message TEXT,
    created_at REAL NOT NULL,
    finished_at REAL
);

CREATE TABLE IF NOT EXISTS audit_sessions (
    id TEXT PRIMARY KEY,
    scan_id TEXT NOT NULL UNIQUE,
    auditor_name TEXT NOT NULL DEFAULT '',
    status TEXT NOT NULL DEFAULT 'in_progress',
    created_at REAL NOT NULL,
    completed_at REAL,
    FOREIGN KEY (scan_id) REFERENCES scans(id)
);

CREATE TABLE IF NOT EXISTS criterion_evaluations (
    id TEXT PRIMARY KEY,
    session_id TEXT NOT NULL,
    criterion_id TEXT NOT NULL,
    title TEXT NOT NULL DEFAULT '',
    level TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'not_evaluated',
    notes TEXT NOT NULL DEFAULT '',
    automated_signal INTEGER NOT NULL DEFAULT 1,
    position INTEGER NOT NULL DEFAULT 0,
    updated_at REAL NOT NULL,
    FOREIGN KEY (session_id) REFERENCES audit_sessions(id),
    UNIQUE (session_id, criterion_id)
);

CREATE TABLE IF NOT EXISTS evidence_items (
    id TEXT PRIMARY KEY,
    evaluation_id TEXT NOT NULL,
    filename TEXT NOT NULL,
    original_name TEXT NOT NULL,
    description TEXT,
    uploaded_at REAL NOT NULL,
    FOREIGN KEY (evaluation_id) REFERENCES criterion_evaluations(id)
);

CREATE INDEX IF NOT EXISTS idx_scans_created
    ON scans(created_at);
CREATE INDEX IF NOT EXISTS idx_evaluations_session
    ON criterion_evaluations(session_id);
CREATE INDEX IF NOT EXISTS idx_evidence_evaluation
    ON evidence_items(evaluation_id);
"""


async def get_db(db_path: str | Path) -> aiosqlite.Connection:
    """Open (or create) the database and run migrations."""
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    db = await aiosqlite.connect(str(db_path))
    db.row_factory = aiosqlite.Row
    await db.execute("PRAGMA journal_mode=WAL")
    await db.execute("PRAGMA foreign_keys=ON")

    await _migrate(db)
    return db


async def _migrate(db: aiosqlite.Connection) -> None:
    """Run schema migrations if needed."""
    cursor = await db.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_version'"
    )
    row = await cursor.fetchone()

    if row is None:
        # Fresh database: create all tables
        await db.executescript(SCHEMA_SQL)
        await db.execute(
            "INSERT INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,),
        )
        await db.commit()
        logger.info("Database initialized at schema version %d", SCHEMA_VERSION)
        return

    cursor = await db.execute("SELECT version FROM schema_version")
    row = await cursor.fetchone()
    current = row[0] if row else 0

    if current < SCHEMA_VERSION:
        logger.info(
            "Migrating database from version %d to %d",
            current,
            SCHEMA_VERSION,
        )
        await db.executescript(SCHEMA_SQL)
        await db.execute("DELETE FROM schema_version")
        await db.execute(
            "INSERT INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,),
        )
        await db.commit()
