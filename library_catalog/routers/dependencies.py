from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from library_catalog.core.database import get_session_factory
from library_catalog.repositories import AuthorRepository, BookRepository, GenreRepository


def get_author_repository(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AuthorRepository:
    return AuthorRepository(session_factory)


def get_genre_repository(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> GenreRepository:
    return GenreRepository(session_factory)


def get_book_repository(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> BookRepository:
    return BookRepository(session_factory)
