"""Document collection tables and column types."""

import json
from typing import Any

from sqlalchemy import Column, DateTime, MetaData, String, Table, Text, TypeDecorator, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import Dialect


class JSONType(TypeDecorator):
    """A JSON type that works with both PostgreSQL (JSONB) and SQLite (TEXT).

    Uses JSONB on PostgreSQL and falls back to TEXT with JSON serialization
    on other databases like SQLite (used in tests).
    """

    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect: Dialect):
        """Load the appropriate implementation for the database dialect."""
        if dialect.name == "postgresql":
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value: Any, dialect: Dialect) -> Any:
        """Process value before sending to database."""
        if value is None or dialect.name == "postgresql":
            return value
        return json.dumps(value)

    def process_result_value(self, value: Any, dialect: Dialect) -> Any:
        """Process value from database."""
        if isinstance(value, str):
            return json.loads(value)
        return value


def document_table(name: str, metadata: MetaData) -> Table:
    """Get or define the key -> document table called ``name``.

    The string ``id`` column is the document key; the whole document lives
    in a single JSON column.
    """
    if name in metadata.tables:
        return metadata.tables[name]
    return Table(
        name,
        metadata,
        Column("id", String(255), primary_key=True),
        Column("document", JSONType(), nullable=False),
        Column(
            "updated_at",
            DateTime(timezone=True),
            server_default=func.now(),
            nullable=False,
        ),
    )
