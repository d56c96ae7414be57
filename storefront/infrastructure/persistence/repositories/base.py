"""Base repository: generic CRUD plus keyed bulk delete/update with RETURNING."""

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import Select, delete, func, inspect as sa_inspect, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import object_session

from storefront.domain.exceptions import ResourceNotFoundException
from storefront.infrastructure.persistence.database import Base


class BaseRepository[ModelType: Base]:
    """Base repository with get/list/create/update/delete and keyed bulk operations.

    Implements the keyed resource store used by the action layer:
    delete_by_key and delete_by_key_set return the deleted rows, and
    transaction() groups a pre-delete step with the delete so a failure
    in either leaves the database untouched.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def get_by_ids(self, entity_ids: Sequence[str]) -> list[ModelType]:
        """Return the records whose id is in entity_ids (unknown ids are skipped)."""
        if not entity_ids:
            return []
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).where(model.id.in_(list(entity_ids)))
        )
        return list(result.scalars().all())

    async def paginate(
        self, stmt: Select[Any], page: int, per_page: int
    ) -> tuple[list[ModelType], int]:
        """Run a select for one page and count the full result set.

        Args:
            stmt: Filtered and ordered select over this repository's model.
            page: 1-based page number.
            per_page: Page size.

        Returns:
            (rows for the page, total matching rows).
        """
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = (await self.db.execute(count_stmt)).scalar_one()
        offset = (page - 1) * per_page
        result = await self.db.execute(stmt.offset(offset).limit(per_page))
        return list(result.scalars().all()), int(total)

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and load server defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush changes on an existing record (merge if detached) and reload it.

        Raises:
            ResourceNotFoundException: Detached object whose row does not exist.
        """
        if object_session(obj) is not self.db.sync_session:
            pk = sa_inspect(obj).identity or ()
            if not pk or await self.db.get(self.model, pk) is None:
                raise ResourceNotFoundException(
                    self.model.__name__, ",".join(str(v) for v in pk)
                )
            obj = await self.db.merge(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        await self.db.delete(obj)
        await self.db.flush()

    async def delete_by_key(self, key: str) -> list[ModelType]:
        """Delete the row whose id equals key and return it (empty list if none)."""
        model: Any = self.model
        result = await self.db.execute(
            delete(self.model).where(model.id == key).returning(self.model)
        )
        return list(result.scalars().all())

    async def delete_by_key_set(self, keys: Sequence[str]) -> list[ModelType]:
        """Delete every row whose id is in keys and return the deleted rows.

        Duplicate keys are harmless; each row is deleted and returned once.
        """
        model: Any = self.model
        result = await self.db.execute(
            delete(self.model).where(model.id.in_(list(keys))).returning(self.model)
        )
        return list(result.scalars().all())

    async def update_by_key(self, key: str, values: dict[str, Any]) -> list[ModelType]:
        """Update the row whose id equals key and return it (empty list if none)."""
        return await self.update_by_key_set([key], values)

    async def update_by_key_set(
        self, keys: Sequence[str], values: dict[str, Any]
    ) -> list[ModelType]:
        """Apply the same column values to every row whose id is in keys."""
        model: Any = self.model
        stmt = (
            update(self.model)
            .where(model.id.in_(list(keys)))
            .values(**values)
            .returning(self.model)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Atomic unit of work on this repository's session.

        Opens a SAVEPOINT when the session is already inside a transaction
        (e.g. the request-scoped get_db_transactional session), otherwise a
        top-level transaction that commits on exit. Rolls back on exception.
        """
        if self.db.in_transaction():
            async with self.db.begin_nested():
                yield self.db
        else:
            async with self.db.begin():
                yield self.db
