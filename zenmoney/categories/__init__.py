"""Category registry package."""

from zenmoney.categories.registry import (
    EXPENSE_CATEGORIES,
    FALLBACK_COLOR,
    FALLBACK_LABEL,
    INCOME_CATEGORIES,
    categories_for,
    fallback_category,
    find_category,
    icon_glyph,
    resolve_icon,
)

__all__ = [
    "EXPENSE_CATEGORIES",
    "FALLBACK_COLOR",
    "FALLBACK_LABEL",
    "INCOME_CATEGORIES",
    "categories_for",
    "fallback_category",
    "find_category",
    "icon_glyph",
    "resolve_icon",
]
