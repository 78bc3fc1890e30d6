"""
Category Registry

Static lookup table from category id to display metadata. Two disjoint
ordered lists, one per transaction type; order is display order only.

DESIGN DECISION: Lookup returns Optional. Callers that need something to
display build the fallback explicitly with fallback_category(), so the
"show Unknown" policy is visible at every call site.
"""

from typing import Optional

from zenmoney.models.transaction import CategoryOption, IconName, TransactionType


FALLBACK_LABEL = "Unknown"
FALLBACK_COLOR = "#94a3b8"


EXPENSE_CATEGORIES: tuple[CategoryOption, ...] = (
    CategoryOption(id="food", label="Food & Dining", icon=IconName.UTENSILS, color="#ef4444", type=TransactionType.EXPENSE),
    CategoryOption(id="transport", label="Transportation", icon=IconName.BUS, color="#f97316", type=TransactionType.EXPENSE),
    CategoryOption(id="shopping", label="Shopping", icon=IconName.SHOPPING_BAG, color="#eab308", type=TransactionType.EXPENSE),
    CategoryOption(id="housing", label="Housing", icon=IconName.HOME, color="#84cc16", type=TransactionType.EXPENSE),
    CategoryOption(id="utilities", label="Utilities", icon=IconName.ZAP, color="#06b6d4", type=TransactionType.EXPENSE),
    CategoryOption(id="health", label="Health", icon=IconName.HEART_PULSE, color="#ec4899", type=TransactionType.EXPENSE),
    CategoryOption(id="entertainment", label="Entertainment", icon=IconName.GAMEPAD, color="#8b5cf6", type=TransactionType.EXPENSE),
    CategoryOption(id="education", label="Education", icon=IconName.GRADUATION_CAP, color="#6366f1", type=TransactionType.EXPENSE),
    CategoryOption(id="other_expense", label="Other", icon=IconName.MORE_HORIZONTAL, color="#64748b", type=TransactionType.EXPENSE),
)

INCOME_CATEGORIES: tuple[CategoryOption, ...] = (
    CategoryOption(id="salary", label="Salary", icon=IconName.BRIEFCASE, color="#22c55e", type=TransactionType.INCOME),
    CategoryOption(id="investment", label="Investment", icon=IconName.TRENDING_UP, color="#10b981", type=TransactionType.INCOME),
    CategoryOption(id="gift", label="Gifts", icon=IconName.GIFT, color="#3b82f6", type=TransactionType.INCOME),
    CategoryOption(id="other_income", label="Other", icon=IconName.MORE_HORIZONTAL, color="#94a3b8", type=TransactionType.INCOME),
)

# Streamlit has no icon components; render icons as emoji
ICON_GLYPHS: dict[IconName, str] = {
    IconName.UTENSILS: "🍽️",
    IconName.BUS: "🚌",
    IconName.SHOPPING_BAG: "🛍️",
    IconName.HOME: "🏠",
    IconName.ZAP: "⚡",
    IconName.HEART_PULSE: "💓",
    IconName.GAMEPAD: "🎮",
    IconName.GRADUATION_CAP: "🎓",
    IconName.MORE_HORIZONTAL: "⋯",
    IconName.BRIEFCASE: "💼",
    IconName.TRENDING_UP: "📈",
    IconName.GIFT: "🎁",
    IconName.HELP_CIRCLE: "❔",
}


def categories_for(transaction_type: TransactionType) -> tuple[CategoryOption, ...]:
    """The registry subset valid for a transaction type, in display order."""
    if transaction_type == TransactionType.INCOME:
        return INCOME_CATEGORIES
    return EXPENSE_CATEGORIES


def find_category(
    category_id: str,
    transaction_type: TransactionType,
) -> Optional[CategoryOption]:
    """
    Look up a category id within the subset for its type.

    An id from the other type's list does not resolve: an income
    transaction tagged "food" is treated as unknown.
    """
    for option in categories_for(transaction_type):
        if option.id == category_id:
            return option
    return None


def fallback_category(
    category_id: str,
    transaction_type: TransactionType,
) -> CategoryOption:
    """Display stand-in for an id the registry doesn't know."""
    return CategoryOption(
        id=category_id,
        label=FALLBACK_LABEL,
        icon=IconName.HELP_CIRCLE,
        color=FALLBACK_COLOR,
        type=transaction_type,
    )


def resolve_icon(name: str) -> IconName:
    """Map an icon name to the enum, HELP_CIRCLE when unrecognised."""
    try:
        return IconName(name)
    except ValueError:
        return IconName.HELP_CIRCLE


def icon_glyph(icon: IconName) -> str:
    return ICON_GLYPHS.get(icon, ICON_GLYPHS[IconName.HELP_CIRCLE])
