from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from library_catalog.models.base import Base


class Genre(Base):
    # Uniqueness is checked by the create handler, not by the store
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    @property
    def url(self) -> str:
        return f"/catalog/genre/{self.id}"

    def __repr__(self) -> str:
        return f"<Genre id={self.id} name={self.name!r}>"
