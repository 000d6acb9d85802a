from library_catalog.models import Author
from library_catalog.repositories.base import BaseRepository


class AuthorRepository(BaseRepository[Author]):
    """Authors, listed by family name."""

    model = Author
    order_by = "family_name"
