from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from library_catalog.models.base import Base


def format_date(value) -> str:
    """Render a date as e.g. "Jan 5, 1950"; anything else as-is."""
    if isinstance(value, date):
        return f"{value:%b} {value.day}, {value.year}"
    return value or ""


class Author(Base):
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    family_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    date_of_birth: Mapped[Optional[date]] = mapped_column(Date)
    date_of_death: Mapped[Optional[date]] = mapped_column(Date)

    @property
    def name(self) -> str:
        # Both parts are required; a partial name is shown as empty
        if not self.first_name or not self.family_name:
            return ""
        return f"{self.family_name}, {self.first_name}"

    @property
    def url(self) -> str:
        return f"/catalog/author/{self.id}"

    @property
    def date_of_birth_formatted(self) -> str:
        return format_date(self.date_of_birth)

    @property
    def date_of_death_formatted(self) -> str:
        return format_date(self.date_of_death)

    @property
    def lifespan(self) -> str:
        return f"{self.date_of_birth_formatted} - {self.date_of_death_formatted}"

    def __repr__(self) -> str:
        return f"<Author id={self.id} name={self.name!r}>"
