"""Validation errors raised at the simulation call boundary.

Both classes subclass :class:`ValueError` so callers that already guard
against ``ValueError`` keep working. They carry enough context to point at
the offending input without parsing the message:

.. code-block:: python

    from debtsage.errors import InvalidAccountError

    try:
        simulate(accounts, extra_monthly_payment=500, policy="avalanche")
    except InvalidAccountError as exc:
        print(exc.account_id, exc.field)
"""

from __future__ import annotations

from typing import Any


class DebtSageError(Exception):
    """Base class for errors raised by DebtSage."""


class InvalidAccountError(DebtSageError, ValueError):
    """An account snapshot violates the input contract.

    Raised for negative or non-numeric ``balance``, ``apr`` or
    ``minimum_payment`` values and for duplicate account ids.
    """

    def __init__(self, message: str, *, field: str, account_id: Any = None) -> None:
        super().__init__(message)
        self.field = field
        self.account_id = account_id


class InvalidPaymentError(DebtSageError, ValueError):
    """The monthly extra payment is negative or not a number."""

    def __init__(self, message: str, *, field: str = "extra_monthly_payment") -> None:
        super().__init__(message)
        self.field = field


__all__ = ["DebtSageError", "InvalidAccountError", "InvalidPaymentError"]
