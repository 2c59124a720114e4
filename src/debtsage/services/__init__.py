"""Service module exports."""

from . import accounts_io, comparison, debts

__all__ = ["accounts_io", "comparison", "debts"]
