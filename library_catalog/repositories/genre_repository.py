from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from library_catalog.core.logger_config import log_db_error, logger
from library_catalog.models import Genre
from library_catalog.repositories.base import BaseRepository


class GenreRepository(BaseRepository[Genre]):
    """Genres, listed by name."""

    model = Genre
    order_by = "name"

    async def get_by_name(self, name: str) -> Optional[Genre]:
        """
        Find the first genre with exactly this name.

        Args:
            name: Sanitized genre name

        Returns:
            The genre, or None if there is none
        """
        logger.debug(f"Looking up genre by name: '{name}'")
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(Genre).where(Genre.name == name).limit(1))
                return result.scalars().first()
        except SQLAlchemyError as e:
            log_db_error(e, operation="get_genre_by_name", context={"name": name})
            raise
