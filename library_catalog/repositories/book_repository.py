from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import load_only

from library_catalog.core.logger_config import log_db_error
from library_catalog.models import Book, book_genres
from library_catalog.repositories.base import BaseRepository


class BookRepository(BaseRepository[Book]):
    """
    Read access to books for the author and genre pages.

    Books are only looked up here by the author or genre they reference, sorted by title.
    """

    model = Book

    async def find_by_author(self, author_id: int, summary_only: bool = False) -> list[Book]:
        """
        Books written by the author.

        Args:
            author_id: Author identifier
            summary_only: Load only title and summary

        Returns:
            Matching books, possibly empty
        """
        query = select(Book).where(Book.author_id == author_id)
        if summary_only:
            query = query.options(load_only(Book.title, Book.summary))
        return await self._find(query, operation="find_books_by_author", context={"author_id": author_id})

    async def find_by_genre(self, genre_id: int) -> list[Book]:
        query = select(Book).join(book_genres, book_genres.c.book_id == Book.id).where(book_genres.c.genre_id == genre_id)
        return await self._find(query, operation="find_books_by_genre", context={"genre_id": genre_id})

    async def _find(self, query, operation: str, context: dict) -> list[Book]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(query.order_by(Book.title.asc(), Book.id.asc()))
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            log_db_error(e, operation=operation, context=context)
            raise
