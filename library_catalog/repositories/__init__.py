from .author_repository import AuthorRepository
from .book_repository import BookRepository
from .genre_repository import GenreRepository

__all__ = ["AuthorRepository", "BookRepository", "GenreRepository"]
