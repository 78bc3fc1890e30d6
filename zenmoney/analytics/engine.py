"""
Aggregation Engine

DESIGN DECISION: Every aggregation is a pure function over a list of
transactions. Nothing here does I/O, mutates its input, or keeps state
between calls; views simply recompute on every change.

GUARANTEES:
- Total over well-formed transactions: nothing here raises
- Amounts are never dropped or double-counted by grouping
- Sorting is stable, so equal dates keep insertion order
  (newest-created first, since new transactions are prepended)
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from zenmoney.categories import fallback_category, find_category
from zenmoney.models.transaction import (
    CategoryShare,
    CategoryStat,
    TimeWindow,
    Totals,
    Transaction,
    TransactionFilter,
    TransactionType,
    TrendPoint,
    Window,
    month_key,
)


MONTH_LABELS: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_ZERO = Decimal("0")


def month_label(value: date) -> str:
    """Abbreviated month name used as a trend bucket key."""
    return MONTH_LABELS[value.month - 1]


# =============================================================================
# TOTALS & RECENCY
# =============================================================================

def compute_totals(transactions: Iterable[Transaction]) -> Totals:
    """Income, expense and balance (income - expense) over all transactions."""
    income = _ZERO
    expense = _ZERO
    for transaction in transactions:
        if transaction.type == TransactionType.INCOME:
            income += transaction.amount
        elif transaction.type == TransactionType.EXPENSE:
            expense += transaction.amount
    return Totals(income=income, expense=expense, balance=income - expense)


def _newest_first(transactions: Iterable[Transaction]) -> list[Transaction]:
    # sorted() is stable: equal dates keep their input order
    return sorted(transactions, key=lambda t: t.date, reverse=True)


def select_recent(transactions: Iterable[Transaction], n: int) -> list[Transaction]:
    """The n most recent transactions, newest first."""
    if n <= 0:
        return []
    return _newest_first(transactions)[:n]


# =============================================================================
# CATEGORY BREAKDOWN
# =============================================================================

def group_by_category(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType,
) -> list[CategoryStat]:
    """
    Sum amounts per category id for one transaction type.

    Ids the registry doesn't know still get their own entry, displayed
    with the fallback label and colour. Result is sorted by value,
    largest first; ties keep the order of first appearance.
    """
    groups: dict[str, Decimal] = {}
    for transaction in transactions:
        if transaction.type != transaction_type:
            continue
        groups[transaction.category] = groups.get(transaction.category, _ZERO) + transaction.amount

    stats = []
    for category_id, value in groups.items():
        option = find_category(category_id, transaction_type)
        if option is None:
            option = fallback_category(category_id, transaction_type)
        stats.append(CategoryStat(
            category_id=category_id,
            name=option.label,
            value=value,
            color=option.color,
            icon=option.icon,
        ))

    stats.sort(key=lambda s: s.value, reverse=True)
    return stats


def category_shares(stats: Iterable[CategoryStat]) -> list[CategoryShare]:
    """
    Attach a rounded whole-percent share to each stat.

    Returns [] when the breakdown total is zero; callers show an empty
    state instead of percentages.
    """
    stats = list(stats)
    total = sum((s.value for s in stats), _ZERO)
    if total == 0:
        return []
    return [
        CategoryShare(
            stat=stat,
            percent=int((stat.value * 100 / total).quantize(Decimal("1"), rounding=ROUND_HALF_UP)),
        )
        for stat in stats
    ]


# =============================================================================
# TIME WINDOWS & TRENDS
# =============================================================================

def _in_window(value: date, window: Window, reference: date) -> bool:
    if window == TimeWindow.ALL:
        return True
    if window == TimeWindow.YEAR:
        return value.year == reference.year
    if window == TimeWindow.MONTH:
        return value.year == reference.year and value.month == reference.month
    # Anything else is an explicit "YYYY-MM" key; a malformed key matches nothing
    return month_key(value) == window


def filter_by_window(
    transactions: Iterable[Transaction],
    window: Window,
    reference_date: Optional[date] = None,
) -> list[Transaction]:
    """
    Keep transactions inside a time window.

    MONTH and YEAR are relative to reference_date (default: today).
    Always returns a new list.
    """
    reference = reference_date or date.today()
    return [t for t in transactions if _in_window(t.date, window, reference)]


def build_monthly_trend(
    transactions: Iterable[Transaction],
    window: Window,
    reference_date: Optional[date] = None,
) -> list[TrendPoint]:
    """
    Expense totals bucketed by month name.

    YEAR always yields 12 points, Jan..Dec, zero-filled. Other windows
    only get buckets for months that have expenses, in first-seen order.
    Buckets are keyed by month name alone, so under ALL the same month
    of different years lands in one bucket.
    """
    in_window = filter_by_window(transactions, window, reference_date)

    buckets: dict[str, Decimal] = {}
    if window == TimeWindow.YEAR:
        buckets = {label: _ZERO for label in MONTH_LABELS}

    for transaction in in_window:
        if transaction.type != TransactionType.EXPENSE:
            continue
        label = month_label(transaction.date)
        buckets[label] = buckets.get(label, _ZERO) + transaction.amount

    return [TrendPoint(label=label, value=value) for label, value in buckets.items()]


# =============================================================================
# HISTORY BROWSER
# =============================================================================

def filter_transaction_list(
    transactions: Iterable[Transaction],
    criteria: Optional[TransactionFilter] = None,
) -> list[Transaction]:
    """
    Transactions matching type AND search text AND month, newest first.

    With no criteria this is still scoped to the current month.
    """
    criteria = criteria or TransactionFilter()
    needle = criteria.search_text.lower()

    matched = []
    for transaction in transactions:
        if criteria.type is not None and transaction.type != criteria.type:
            continue
        if needle and needle not in transaction.description.lower():
            continue
        if month_key(transaction.date) != criteria.month_key:
            continue
        matched.append(transaction)

    return _newest_first(matched)
