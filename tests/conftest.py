"""Pytest configuration and shared fixtures for DebtSage tests.

This module provides account factories, the two reference portfolios used
across the suite and helper assertions for Decimal money values.
"""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from debtsage.models import DebtAccount


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep configuration and log files inside the test's temporary directory."""

    monkeypatch.setenv("DEBTSAGE_DATA_DIR", str(tmp_path / "instance"))
    for name in (
        "DEBTSAGE_HORIZON_MONTHS",
        "DEBTSAGE_EPSILON",
        "DEBTSAGE_WHAT_IF_INCREMENTS",
        "DEBTSAGE_DEV_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    logger = logging.getLogger("debtsage")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


# =============================================================================
# Account Fixtures
# =============================================================================


@pytest.fixture
def account_factory():
    """Factory for creating test debt accounts.

    Returns:
        Callable: Function that builds DebtAccount snapshots
    """

    def _create_account(
        id: int | str = 1,
        balance: str | float = "1000.00",
        apr: str | float = "18.0",
        minimum_payment: str | float = "25.00",
        name: str = "Test Debt",
    ) -> DebtAccount:
        """Create a test account with sensible defaults.

        Args:
            id: Account identifier
            balance: Current outstanding balance
            apr: Annual percentage rate (e.g., 18.0 for 18%)
            minimum_payment: Minimum monthly payment
            name: Display label

        Returns:
            DebtAccount: Immutable account snapshot
        """
        return DebtAccount(
            id=id,
            name=name,
            balance=balance,
            apr=apr,
            minimum_payment=minimum_payment,
        )

    return _create_account


@pytest.fixture
def two_card_portfolio(account_factory):
    """A: 100,000 at 24% (min 3,000); B: 20,000 at 12% (min 1,000)."""

    return [
        account_factory(id="A", name="Card A", balance="100000", apr="24", minimum_payment="3000"),
        account_factory(id="B", name="Card B", balance="20000", apr="12", minimum_payment="1000"),
    ]


@pytest.fixture
def mixed_portfolio(account_factory):
    """Three debts where balance order and rate order disagree."""

    return [
        account_factory(id=1, balance="5000", apr="18", minimum_payment="100"),
        account_factory(id=2, balance="1000", apr="12", minimum_payment="50"),
        account_factory(id=3, balance="3000", apr="15", minimum_payment="75"),
    ]


# =============================================================================
# Helper Functions
# =============================================================================


def assert_money_equal(actual, expected, tolerance: str = "0.01") -> None:
    """Assert that two money values are equal within a tolerance.

    Args:
        actual: Actual value (Decimal, int, str or float)
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    difference = abs(Decimal(str(actual)) - Decimal(str(expected)))
    assert difference <= Decimal(tolerance), (
        f"Expected {expected}, got {actual} (difference: {difference}, tolerance: {tolerance})"
    )
