from datetime import date
from typing import Annotated, ClassVar, Optional

from pydantic import AfterValidator, BeforeValidator

from library_catalog.core.validation import (
    CatalogForm,
    alphanumeric,
    check_all,
    escape,
    optional_iso_date,
    required,
    trim,
)


class AuthorForm(CatalogForm):
    """
    Author create/update form
    """

    text_fields: ClassVar[tuple[str, ...]] = ("first_name", "family_name")

    first_name: Annotated[
        str,
        BeforeValidator(trim),
        AfterValidator(escape),
        AfterValidator(
            check_all(
                required("First Name must be specified"),
                alphanumeric("First name has non-alphanumeric characters."),
            )
        ),
    ] = ""
    family_name: Annotated[
        str,
        BeforeValidator(trim),
        AfterValidator(escape),
        AfterValidator(
            check_all(
                required("Family name must be specified."),
                alphanumeric("Family name has non-alphanumeric characters."),
            )
        ),
    ] = ""
    date_of_birth: Annotated[Optional[date], BeforeValidator(optional_iso_date("Invalid date of birth"))] = None
    date_of_death: Annotated[Optional[date], BeforeValidator(optional_iso_date("Invalid date of death"))] = None
