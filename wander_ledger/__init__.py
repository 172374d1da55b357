"""Wander Ledger: multi-currency travel expenses, budgets and cash wallet."""

__version__ = "0.1.0"
