"""Validation package."""

from zenmoney.validation.validator import TransactionValidator

__all__ = ["TransactionValidator"]
