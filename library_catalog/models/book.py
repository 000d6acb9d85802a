from __future__ import annotations

from typing import List, Optional

from sqlalchemy import Column, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_catalog.models.base import Base
from library_catalog.models.genre import Genre

book_genres = Table(
    "book_genres",
    Base.metadata,
    Column("book_id", ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)


class Book(Base):
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    summary: Mapped[Optional[str]] = mapped_column(Text)
    isbn: Mapped[Optional[str]] = mapped_column(String(20))
    author_id: Mapped[int] = mapped_column(ForeignKey("authors.id"), nullable=False, index=True)
    genres: Mapped[List[Genre]] = relationship(secondary=book_genres)

    @property
    def url(self) -> str:
        return f"/catalog/book/{self.id}"

    def __repr__(self) -> str:
        return f"<Book id={self.id} title={self.title!r}>"
