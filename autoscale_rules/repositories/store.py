"""Key -> document storage for auto-scale rules."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Optional, Protocol

from sqlalchemy import MetaData, delete, func, insert, select, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from autoscale_rules.database import get_session_factory
from autoscale_rules.database import metadata as default_metadata
from autoscale_rules.exceptions import NotFoundError, StoreError
from autoscale_rules.logging_config import get_logger
from autoscale_rules.models.base import document_table

logger = get_logger(__name__)

_ON_CONFLICT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class RuleStore(Protocol):
    """Persistent collection of documents keyed by a unique string."""

    async def upsert(self, key: str, document: dict[str, Any]) -> None: ...

    async def find_by_key(self, key: str) -> Optional[dict[str, Any]]: ...

    async def find_all(self) -> list[tuple[str, dict[str, Any]]]: ...

    async def delete_by_key(self, key: str) -> None: ...


class SQLAlchemyRuleStore:
    """RuleStore backed by one SQL table per collection.

    Every operation opens its own session and releases it on exit.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        collection_name: str,
        metadata: Optional[MetaData] = None,
    ):
        self.engine = engine
        self.collection_name = collection_name
        self.table = document_table(collection_name, metadata or default_metadata)
        self._session_factory = get_session_factory(engine)

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                logger.error(
                    "Rule store operation failed",
                    operation=operation,
                    collection=self.collection_name,
                    error=str(e),
                )
                raise StoreError(
                    f"Rule store {operation} failed: {e}",
                    details={"collection": self.collection_name, "operation": operation},
                ) from e

    async def create_collection(self) -> None:
        """Create the collection table if it does not exist."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(self.table.create, checkfirst=True)
        except SQLAlchemyError as e:
            raise StoreError(
                f"Could not create collection {self.collection_name}: {e}",
                details={"collection": self.collection_name},
            ) from e

    async def upsert(self, key: str, document: dict[str, Any]) -> None:
        """Insert or fully replace the document stored under ``key``."""
        table = self.table
        async with self._session("upsert") as session:
            async with session.begin():
                dialect_insert = _ON_CONFLICT_INSERTS.get(self.engine.dialect.name)
                if dialect_insert is not None:
                    stmt = dialect_insert(table).values(id=key, document=document)
                    stmt = stmt.on_conflict_do_update(
                        index_elements=[table.c.id],
                        set_={"document": stmt.excluded.document, "updated_at": func.now()},
                    )
                    await session.execute(stmt)
                    return

                result = await session.execute(
                    update(table)
                    .where(table.c.id == key)
                    .values(document=document, updated_at=func.now())
                )
                if result.rowcount == 0:
                    await session.execute(insert(table).values(id=key, document=document))

    async def find_by_key(self, key: str) -> Optional[dict[str, Any]]:
        """Get the document stored under ``key``, or None."""
        async with self._session("find") as session:
            result = await session.execute(
                select(self.table.c.document).where(self.table.c.id == key)
            )
            return result.scalar_one_or_none()

    async def find_all(self) -> list[tuple[str, dict[str, Any]]]:
        """Get every (key, document) pair in the collection."""
        async with self._session("find_all") as session:
            result = await session.execute(select(self.table.c.id, self.table.c.document))
            return [(row.id, row.document) for row in result.all()]

    async def delete_by_key(self, key: str) -> None:
        """Delete the document stored under ``key``."""
        async with self._session("delete") as session:
            async with session.begin():
                result = await session.execute(
                    delete(self.table).where(self.table.c.id == key)
                )
                if result.rowcount == 0:
                    raise NotFoundError("auto-scale rule", key)
