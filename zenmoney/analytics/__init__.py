"""Transaction aggregation and analytics package."""

from zenmoney.analytics.engine import (
    MONTH_LABELS,
    build_monthly_trend,
    category_shares,
    compute_totals,
    filter_by_window,
    filter_transaction_list,
    group_by_category,
    month_label,
    select_recent,
)
from zenmoney.analytics.formatting import (
    currency_symbol,
    format_compact,
    format_currency,
    format_date,
    format_signed,
)

__all__ = [
    "MONTH_LABELS",
    "build_monthly_trend",
    "category_shares",
    "compute_totals",
    "filter_by_window",
    "filter_transaction_list",
    "group_by_category",
    "month_label",
    "select_recent",
    "currency_symbol",
    "format_compact",
    "format_currency",
    "format_date",
    "format_signed",
]
