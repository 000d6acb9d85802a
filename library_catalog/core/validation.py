"""
Form sanitizers and validators.

Form models declare each field as an ``Annotated`` chain: a ``BeforeValidator(trim)``
followed by ``AfterValidator`` steps that run in order. Sanitizers return the transformed
value. A field's rules are grouped with ``check_all``: every rule runs, and each failing one
contributes its own message, which is shown on the form as-is. Every field is always checked.
"""

import re
from datetime import date, datetime, timedelta
from typing import Any, Callable, ClassVar, Mapping, NamedTuple

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_core import PydanticCustomError

_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        '"': "&quot;",
        "'": "&#x27;",
        "<": "&lt;",
        ">": "&gt;",
        "/": "&#x2F;",
        "\\": "&#x5C;",
        "`": "&#96;",
    }
)
_ALPHANUMERIC = re.compile(r"[0-9A-Za-z]+")
_YEAR_MONTH = re.compile(r"(\d{4})(?:-(\d{2}))?")
_ORDINAL_DATE = re.compile(r"(\d{4})-?(\d{3})")


class Rule(NamedTuple):
    passes: Callable[[str], bool]
    message: str


def trim(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


def escape(value: str) -> str:
    """Replace HTML-significant characters with entities."""
    return value.translate(_ESCAPE_TABLE)


def required(message: str) -> Rule:
    return Rule(lambda value: len(value) >= 1, message)


def alphanumeric(message: str) -> Rule:
    return Rule(lambda value: _ALPHANUMERIC.fullmatch(value) is not None, message)


def check_all(*rules: Rule):
    """
    Run every rule against the value.

    Raises:
        PydanticCustomError: Carrying the messages of all failing rules in ``ctx["messages"]``
    """

    def check(value: str) -> str:
        failed = [rule.message for rule in rules if not rule.passes(value)]
        if failed:
            raise PydanticCustomError("field_rules", "; ".join(failed), {"messages": failed})
        return value

    return check


def parse_iso_date(value: str) -> date:
    """
    Parse an ISO 8601 date and reduce it to a calendar date.

    Besides complete dates and timestamps, reduced precision (``1950``, ``1950-06``) maps to
    the first day of the period, and ordinal dates (``1950-157``) are accepted.

    Raises:
        ValueError: If the value is not ISO 8601
    """
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass

    match = _YEAR_MONTH.fullmatch(value)
    if match:
        year, month = match.groups()
        return date(int(year), int(month or 1), 1)

    match = _ORDINAL_DATE.fullmatch(value)
    if match:
        year, day = int(match.group(1)), int(match.group(2))
        parsed = date(year, 1, 1) + timedelta(days=day - 1)
        if day < 1 or parsed.year != year:
            raise ValueError(f"Day {day} is out of range for {year}")
        return parsed

    return datetime.fromisoformat(value).date()


def optional_iso_date(message: str):
    """Skip empty values, otherwise require an ISO 8601 date and convert it."""

    def check(value: Any) -> Any:
        if not value:
            return None
        if isinstance(value, date):
            return value
        if not isinstance(value, str):
            raise PydanticCustomError("iso_date", message)
        try:
            return parse_iso_date(value)
        except ValueError:
            raise PydanticCustomError("iso_date", message) from None

    return check


class CatalogForm(BaseModel):
    """
    Base class for submitted forms.

    ``text_fields`` lists the fields that are trimmed and escaped, so the values can be
    shown back on the form even when validation fails.
    """

    model_config = ConfigDict(validate_default=True)

    text_fields: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def sanitize(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        values = {}
        for field in cls.model_fields:
            value = data.get(field)
            if field in cls.text_fields and isinstance(value, str):
                value = escape(trim(value))
            values[field] = value
        return values


def validate_form(form_class: type[CatalogForm], data: Mapping[str, Any]) -> tuple[dict[str, Any], list[dict[str, str]]]:
    """
    Run a form model over submitted data.

    Returns:
        The sanitized values and the list of errors (``field`` and ``msg``), in field order
        and, within a field, in rule order. The error list is empty when the form is valid.
    """
    try:
        form = form_class.model_validate(dict(data))
    except ValidationError as exc:
        errors = []
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else ""
            for message in error.get("ctx", {}).get("messages", [error["msg"]]):
                errors.append({"field": field, "msg": message})
        return form_class.sanitize(data), errors
    return form.model_dump(), []
