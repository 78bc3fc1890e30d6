"""
ZenMoney - Source Package

A personal finance tracker: record income and expenses, see where the
money goes, and ask an AI assistant about your own history.

DESIGN PRINCIPLES:
1. Aggregations are pure functions recomputed from scratch
2. External failures become safe defaults or readable text at their boundary
3. Unknown categories degrade to a visible fallback, never an error
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "ZenMoney Team"
