"""
Test fixtures
"""

import pytest
from httpx import ASGITransport, AsyncClient

from library_catalog.core.config import Settings
from library_catalog.core.database import create_db_engine, create_session_factory, get_session_factory, init_db
from library_catalog.main import create_app
from library_catalog.models import Author, Book, Genre
from library_catalog.repositories import AuthorRepository, BookRepository, GenreRepository

BASE_URL = "http://test"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a throw-away SQLite file, console logging only"""
    return Settings(
        SQLALCHEMY_DATABASE_URI=f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        LOG_FILE=None,
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
async def test_engine(test_settings):
    engine = create_db_engine(test_settings)
    await init_db(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest.fixture
def app(test_settings, session_factory):
    app = create_app(test_settings)
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as client:
        yield client


@pytest.fixture
def author_repo(session_factory) -> AuthorRepository:
    return AuthorRepository(session_factory)


@pytest.fixture
def genre_repo(session_factory) -> GenreRepository:
    return GenreRepository(session_factory)


@pytest.fixture
def book_repo(session_factory) -> BookRepository:
    return BookRepository(session_factory)


@pytest.fixture
def make_author(author_repo):
    async def _make_author(first_name="Isaac", family_name="Asimov", date_of_birth=None, date_of_death=None) -> Author:
        author = Author(
            first_name=first_name,
            family_name=family_name,
            date_of_birth=date_of_birth,
            date_of_death=date_of_death,
        )
        return await author_repo.create(author)

    return _make_author


@pytest.fixture
def make_genre(genre_repo):
    async def _make_genre(name="Science Fiction") -> Genre:
        return await genre_repo.create(Genre(name=name))

    return _make_genre


@pytest.fixture
def make_book(book_repo):
    async def _make_book(author: Author, title="Foundation", summary="A galactic empire falls.", genres=()) -> Book:
        book = Book(title=title, summary=summary, isbn="9780553293357", author_id=author.id, genres=list(genres))
        return await book_repo.create(book)

    return _make_book
