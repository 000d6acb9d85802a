"""
Form models for the catalog pages.
"""

from .author import AuthorForm
from .genre import GenreCreateForm, GenreUpdateForm

__all__ = ["AuthorForm", "GenreCreateForm", "GenreUpdateForm"]
