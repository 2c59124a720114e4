"""Debt account snapshots consumed by the payoff simulator."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Union

from ..errors import InvalidAccountError

Amount = Union[Decimal, int, float, str]
AccountId = Union[int, str]


def to_decimal(value: Any, *, field: str, account_id: Any = None) -> Decimal:
    """Coerce a monetary or rate value to ``Decimal`` and reject negatives.

    Floats go through ``str()`` first so ``0.1`` becomes ``Decimal("0.1")``
    instead of its binary expansion.
    """

    if isinstance(value, bool) or value is None:
        raise InvalidAccountError(
            f"{field} must be a number, got {value!r}", field=field, account_id=account_id
        )
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise InvalidAccountError(
                f"{field} must be a number, got {value!r}", field=field, account_id=account_id
            ) from exc
    else:
        raise InvalidAccountError(
            f"{field} must be a number, got {type(value).__name__}",
            field=field,
            account_id=account_id,
        )

    if not amount.is_finite():
        raise InvalidAccountError(
            f"{field} must be finite, got {value!r}", field=field, account_id=account_id
        )
    if amount < 0:
        where = f" for account {account_id!r}" if account_id is not None else ""
        raise InvalidAccountError(
            f"{field} must be non-negative{where}, got {amount}",
            field=field,
            account_id=account_id,
        )
    return amount


@dataclass(frozen=True, slots=True)
class DebtAccount:
    """Represents a liability input for payoff projections.

    ``apr`` is the nominal annual rate in percent (``24`` means 24%/year),
    compounded monthly. Values are normalized to ``Decimal`` on construction.
    """

    id: AccountId
    balance: Decimal
    apr: Decimal
    minimum_payment: Decimal
    name: str = ""

    def __post_init__(self) -> None:
        for field in ("balance", "apr", "minimum_payment"):
            object.__setattr__(
                self, field, to_decimal(getattr(self, field), field=field, account_id=self.id)
            )

    @property
    def monthly_rate(self) -> Decimal:
        return self.apr / Decimal(1200)

    @classmethod
    def from_object(cls, source: Any) -> "DebtAccount":
        """Build a snapshot from any object exposing the account attributes.

        Accepts ``DebtAccount`` instances, mappings and attribute-style records
        such as ORM rows. Missing ``name`` defaults to an empty label.
        """

        if isinstance(source, DebtAccount):
            return source
        if isinstance(source, dict):
            getter = source.get
        else:
            def getter(key: str, default: Any = None) -> Any:
                return getattr(source, key, default)

        account_id = getter("id")
        if account_id is None:
            raise InvalidAccountError("account id is required", field="id")
        missing = [
            key for key in ("balance", "apr", "minimum_payment") if getter(key) is None
        ]
        if missing:
            raise InvalidAccountError(
                f"account {account_id!r} is missing {', '.join(missing)}",
                field=missing[0],
                account_id=account_id,
            )
        return cls(
            id=account_id,
            name=str(getter("name", "") or ""),
            balance=getter("balance"),
            apr=getter("apr"),
            minimum_payment=getter("minimum_payment"),
        )


__all__ = ["AccountId", "Amount", "DebtAccount", "to_decimal"]
