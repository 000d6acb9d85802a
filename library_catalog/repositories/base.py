from typing import Generic, Optional, Type, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from library_catalog.core.logger_config import log_db_error, logger
from library_catalog.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Store operations shared by the catalog record types.

    Every operation runs in its own session, so each is atomic on its own and two
    operations of the same request may be awaited concurrently. Failures are logged
    and re-raised unchanged.
    """

    model: Type[ModelT]
    # Column key to sort get_all() by
    order_by: Optional[str] = None

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    @property
    def table(self) -> str:
        return self.model.__tablename__

    async def get_all(self) -> list[ModelT]:
        """Return every record, sorted ascending by the repository's sort column."""
        query = select(self.model)
        if self.order_by is not None:
            query = query.order_by(getattr(self.model, self.order_by).asc())
        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                records = list(result.scalars().all())
        except SQLAlchemyError as e:
            log_db_error(e, operation=f"get_all_{self.table}")
            raise
        logger.debug(f"Found {len(records)} {self.table}")
        return records

    async def get_by_id(self, record_id: int) -> Optional[ModelT]:
        try:
            async with self.session_factory() as session:
                return await session.get(self.model, record_id)
        except SQLAlchemyError as e:
            log_db_error(e, operation=f"get_{self.table}_by_id", context={"id": record_id})
            raise

    async def create(self, record: ModelT) -> ModelT:
        """Insert a new record; its generated identifier is set on return."""
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    session.add(record)
                await session.refresh(record)
        except SQLAlchemyError as e:
            log_db_error(e, operation=f"create_{self.table}")
            raise
        logger.info(f"Created {self.table} record id={record.id}")
        return record

    async def update(self, record_id: int, replacement: ModelT) -> Optional[ModelT]:
        """
        Overwrite every field of the stored record with the replacement's values.

        Returns the updated record, or None when no record has that identifier.
        """
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    record = await session.get(self.model, record_id)
                    if record is None:
                        logger.debug(f"No {self.table} record with id={record_id} to update")
                        return None
                    for field in self.model.replaceable_fields():
                        setattr(record, field, getattr(replacement, field))
                await session.refresh(record)
        except SQLAlchemyError as e:
            log_db_error(e, operation=f"update_{self.table}", context={"id": record_id})
            raise
        logger.info(f"Updated {self.table} record id={record_id}")
        return record

    async def delete(self, record_id: int) -> bool:
        """Delete by identifier. Returns False when nothing was deleted."""
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    result = await session.execute(delete(self.model).where(self.model.id == record_id))
        except SQLAlchemyError as e:
            log_db_error(e, operation=f"delete_{self.table}", context={"id": record_id})
            raise
        deleted = result.rowcount > 0
        logger.info(f"Delete {self.table} record id={record_id}: {'done' if deleted else 'not found'}")
        return deleted
