"""
Store models.
"""

from .base import Base
from .author import Author
from .genre import Genre
from .book import Book, book_genres

__all__ = [
    "Base",
    "Author",
    "Genre",
    "Book",
    "book_genres",
]
