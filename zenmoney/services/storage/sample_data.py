"""
Sample transactions for first-time users.

Seeded once when nothing is stored, so the dashboard and analytics
have something to show before the first real entry.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from zenmoney.models.transaction import Transaction, TransactionType


# (id, day of current month, amount, description, category, type)
_SAMPLES = (
    ("1", 1, "10000000", "Monthly Salary", "salary", TransactionType.INCOME),
    ("2", 2, "150000", "Grocery Shopping", "food", TransactionType.EXPENSE),
    ("3", 3, "2500000", "Rent Payment", "housing", TransactionType.EXPENSE),
    ("4", 5, "185000", "Netflix & Spotify", "entertainment", TransactionType.EXPENSE),
    ("5", 10, "1500000", "Freelance Project", "other_income", TransactionType.INCOME),
    ("6", 12, "25000", "Coffee", "food", TransactionType.EXPENSE),
)


def build_sample_transactions(today: Optional[date] = None) -> list[Transaction]:
    """Six sample transactions dated within the current month."""
    today = today or date.today()
    return [
        Transaction(
            id=tx_id,
            amount=Decimal(amount),
            description=description,
            category=category,
            date=today.replace(day=day),
            type=tx_type,
        )
        for tx_id, day, amount, description, category, tx_type in _SAMPLES
    ]
