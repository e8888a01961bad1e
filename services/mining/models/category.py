"""Entity categories mined from community discussion."""

from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    LODGING = "lodging"
    AREA = "area"
    EATERY = "eatery"


class UnsupportedCategoryError(ValueError):
    """Raised when a caller asks for a category the engine does not mine."""


def parse_category(value: Category | str) -> Category:
    """
    Coerce a caller-supplied category into a Category.

    Accepts the enum itself or its string value (case-insensitive).
    Unknown values are a programming mistake, not a data condition,
    so they raise instead of returning an empty result.
    """
    if isinstance(value, Category):
        return value
    if isinstance(value, str):
        try:
            return Category(value.strip().lower())
        except ValueError:
            pass
    valid = ", ".join(c.value for c in Category)
    raise UnsupportedCategoryError(
        f"Unsupported category {value!r} (expected one of: {valid})"
    )
