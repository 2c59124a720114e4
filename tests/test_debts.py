"""Debt service tests."""

from __future__ import annotations

from decimal import Decimal

from debtsage.services.debts import avalanche_schedule, snowball_schedule, sort_accounts


def test_snowball_schedule_orders_by_balance(mixed_portfolio):
    """Verify snowball method pays off smallest balances first."""
    result = snowball_schedule(debts=mixed_portfolio, surplus="200")

    assert result.payoff_months > 0
    assert result.converged

    # First month should show debt #2 (smallest balance) getting the extra surplus
    first_month = result.schedule[0]
    assert 2 in first_month.payments

    # Debt #2 should get minimum + surplus = 50 + 200 = 250
    assert first_month.payments[2].payment == Decimal("250")
    assert first_month.payments[1].payment == Decimal("100")
    assert first_month.payments[3].payment == Decimal("75")

    # Smallest balance is cleared first
    assert result.payoff_order[0] == 2


def test_avalanche_schedule_orders_by_apr(mixed_portfolio):
    """Verify avalanche method pays off highest APR debts first."""
    result = avalanche_schedule(debts=mixed_portfolio, surplus="200")

    assert result.payoff_months > 0

    # First month should show debt #1 (highest APR at 18%) getting the extra surplus
    first_month = result.schedule[0]
    assert first_month.payments[1].payment == Decimal("300")
    assert first_month.payments[2].payment == Decimal("50")

    assert [a.id for a in sort_accounts(mixed_portfolio, "avalanche")] == [1, 3, 2]


def test_snowball_vs_avalanche_ordering(account_factory):
    """Confirm snowball and avalanche use different ordering strategies."""
    debts = [
        account_factory(id=1, balance="5000", apr="10", minimum_payment="100"),
        account_factory(id=2, balance="1000", apr="20", minimum_payment="50"),
    ]

    snowball = snowball_schedule(debts=debts, surplus="100")
    avalanche = avalanche_schedule(debts=debts, surplus="100")

    # In this case both methods target debt #2 (smallest balance AND highest APR)
    assert snowball.schedule[0].payments[2].payment == Decimal("150")
    assert avalanche.schedule[0].payments[2].payment == Decimal("150")
    assert snowball.total_interest_paid == avalanche.total_interest_paid
    assert snowball.payoff_months == avalanche.payoff_months
