"""SQLite storage for identities, verified schemas and proofs."""

from __future__ import annotations

import sqlite3

from zkidentity import logger


class RecordNotFoundError(LookupError):
    """Raised when a query that expects a row finds none."""


_SCHEMA = """
CREATE TABLE IF NOT EXISTS identities (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    identity_id TEXT,
    identity_name TEXT,
    parent_id INTEGER REFERENCES identities(id)
);
CREATE UNIQUE INDEX IF NOT EXISTS idx_identities_identity_id ON identities(identity_id);
CREATE UNIQUE INDEX IF NOT EXISTS idx_identities_identity_name ON identities(identity_name);

CREATE TABLE IF NOT EXISTS verified_schemas (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    schema_id TEXT,
    super_identity_id INTEGER,
    schema TEXT
);
CREATE UNIQUE INDEX IF NOT EXISTS idx_verified_schemas_schema_id ON verified_schemas(schema_id);

CREATE TABLE IF NOT EXISTS zero_knowledge_proofs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    digital_identity_schema_id INTEGER REFERENCES verified_schemas(id),
    super_identity_id INTEGER REFERENCES identities(id),
    proof_reference TEXT
);
"""


def connect_to_database(connection_string: str) -> sqlite3.Connection:
    """Open the database and create any missing tables.

    Failing to open or migrate logs a fatal message and exits.
    """
    log = logger.new()
    log.info("Establishing connection to development database: %s", connection_string)

    try:
        db = sqlite3.connect(
            connection_string,
            uri=connection_string.startswith("file:"),
            check_same_thread=False,
            isolation_level=None,
        )
    except sqlite3.Error as exc:
        log.fatal(exc, "Cannot establish database connection")
    db.row_factory = sqlite3.Row

    log.info("Running migrations for tables")
    try:
        db.executescript(_SCHEMA)
    except sqlite3.Error as exc:
        log.fatal(exc, "Migrating database failed")

    log.info("All tables created (or already exist).")
    return db