from typing import Annotated, ClassVar

from pydantic import AfterValidator, BeforeValidator

from library_catalog.core.validation import CatalogForm, check_all, escape, required, trim


class GenreCreateForm(CatalogForm):
    text_fields: ClassVar[tuple[str, ...]] = ("name",)

    name: Annotated[
        str, BeforeValidator(trim), AfterValidator(escape), AfterValidator(check_all(required("Genre name required")))
    ] = ""


class GenreUpdateForm(CatalogForm):
    text_fields: ClassVar[tuple[str, ...]] = ("name",)

    name: Annotated[
        str, BeforeValidator(trim), AfterValidator(escape), AfterValidator(check_all(required("Name cannot be empty")))
    ] = ""
