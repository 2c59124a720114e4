"""Decimal-safe loading and export of account snapshots and results."""

from __future__ import annotations

import csv
import json
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, Mapping

import pandas as pd

from ..errors import InvalidAccountError
from ..models.account import DebtAccount
from ..models.results import ComparisonResult, SimulationResult, WhatIfScenario

# Header aliases accepted on import; keys are normalized (lowercase, stripped).
_COLUMN_ALIASES = {
    "account_id": "id",
    "interest_rate": "apr",
    "annual_interest_rate_percent": "apr",
    "rate": "apr",
    "min_payment": "minimum_payment",
    "minimum": "minimum_payment",
}


def _money(value: Decimal) -> str:
    return str(value)


def _normalize_record(record: Mapping[str, Any]) -> dict[str, Any]:
    normalized: dict[str, Any] = {}
    for key, value in record.items():
        column = str(key).strip().lower()
        normalized[_COLUMN_ALIASES.get(column, column)] = value
    return normalized


def accounts_from_records(records: Iterable[Mapping[str, Any]]) -> list[DebtAccount]:
    """Build ``DebtAccount`` snapshots from plain mappings.

    Numbers may be given as strings, ints or floats; strings are preferred
    because they survive the round trip without binary rounding.
    """

    accounts: list[DebtAccount] = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise InvalidAccountError(
                f"account record #{index} must be an object, got {type(record).__name__}",
                field="record",
            )
        accounts.append(DebtAccount.from_object(_normalize_record(record)))
    return accounts


def account_to_record(account: DebtAccount) -> dict[str, Any]:
    return {
        "id": account.id,
        "name": account.name,
        "balance": _money(account.balance),
        "apr": _money(account.apr),
        "minimum_payment": _money(account.minimum_payment),
    }


def load_accounts_json(path: Path) -> list[DebtAccount]:
    """Read accounts from a JSON list, or an object with an ``accounts`` list.

    JSON numbers are parsed as ``Decimal`` so ``1234.56`` stays exact.
    """

    with Path(path).open("r", encoding="utf-8") as fh:
        payload = json.load(fh, parse_float=Decimal)
    if isinstance(payload, dict):
        if "accounts" not in payload:
            raise InvalidAccountError(
                "accounts file object must have an 'accounts' key", field="accounts"
            )
        payload = payload["accounts"]
    if not isinstance(payload, list):
        raise InvalidAccountError("accounts file must contain a list of accounts", field="accounts")
    return accounts_from_records(payload)


def dump_accounts_json(accounts: Iterable[DebtAccount], path: Path) -> Path:
    """Write accounts as JSON with money encoded as decimal strings."""

    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    records = [account_to_record(account) for account in accounts]
    with output_path.open("w", encoding="utf-8") as fh:
        json.dump({"accounts": records}, fh, indent=2)
        fh.write("\n")
    return output_path


def load_accounts_csv(path: Path, *, encoding: str = "utf-8") -> list[DebtAccount]:
    """Load accounts from a CSV file with id, name, balance, apr, minimum_payment columns.

    Every column is read as text so decimal amounts are never routed through float.
    """

    frame = pd.read_csv(path, encoding=encoding, dtype=str, keep_default_na=False)
    frame.columns = [c.strip().lower() for c in frame.columns]
    frame = frame.rename(columns=_COLUMN_ALIASES)
    missing = [column for column in ("id", "balance", "apr", "minimum_payment") if column not in frame.columns]
    if missing:
        raise InvalidAccountError(
            f"accounts CSV is missing column(s): {', '.join(missing)}", field=missing[0]
        )
    records = []
    for row in frame.to_dict(orient="records"):
        record = {key: (value.strip() if isinstance(value, str) else value) for key, value in row.items()}
        if not any(record.get(column) for column in ("id", "balance")):
            continue  # blank line
        for column in ("balance", "apr", "minimum_payment"):
            if record.get(column) == "":
                record[column] = None
        records.append(record)
    return accounts_from_records(records)


def export_trajectory_csv(*, result: SimulationResult, output_path: Path) -> Path:
    """Write ``month,balance`` rows for charting. Returns the path written."""

    headers = ["month", "balance"]
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=headers, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for point in result.monthly_trajectory:
            writer.writerow({"month": point.month, "balance": _money(point.balance)})

    return output_path


def result_to_dict(result: SimulationResult, *, include_schedule: bool = False) -> dict[str, Any]:
    """Return a JSON-ready mapping; money values are decimal strings."""

    data: dict[str, Any] = {
        "policy": result.policy_name.value,
        "extra_monthly_payment": _money(result.extra_monthly_payment),
        "payoff_months": result.payoff_months,
        "converged": result.converged,
        "total_interest_paid": _money(result.total_interest_paid),
        "total_paid": _money(result.total_paid),
        "starting_balance": _money(result.starting_balance),
        "remaining_balance": _money(result.remaining_balance),
        "payoff_order": list(result.payoff_order),
        "monthly_trajectory": [
            {"month": point.month, "balance": _money(point.balance)}
            for point in result.monthly_trajectory
        ],
    }
    if include_schedule:
        data["schedule"] = [
            {
                "month": row.month,
                "total_balance": _money(row.total_balance),
                "payments": {
                    str(account_id): {
                        "payment_amount": _money(payment.payment),
                        "interest_paid": _money(payment.interest),
                        "remaining_balance": _money(payment.remaining_balance),
                    }
                    for account_id, payment in row.payments.items()
                },
            }
            for row in result.schedule
        ]
    return data


def _scenario_to_dict(scenario: WhatIfScenario) -> dict[str, Any]:
    return {
        "increment": _money(scenario.increment),
        "extra_monthly_payment": _money(scenario.extra_monthly_payment),
        "payoff_months": scenario.payoff_months,
        "total_interest_paid": _money(scenario.total_interest_paid),
        "months_saved": scenario.months_saved,
        "interest_saved": _money(scenario.interest_saved),
        "converged": scenario.converged,
    }


def comparison_to_dict(comparison: ComparisonResult) -> dict[str, Any]:
    return {
        "recommended_policy": comparison.recommended_policy.value,
        "interest_delta": _money(comparison.interest_delta),
        "policy_interest_difference": _money(comparison.policy_interest_difference),
        "avalanche": result_to_dict(comparison.avalanche),
        "snowball": result_to_dict(comparison.snowball),
        "baseline": result_to_dict(comparison.baseline),
        "what_if": [_scenario_to_dict(scenario) for scenario in comparison.what_if],
    }


__all__ = [
    "account_to_record",
    "accounts_from_records",
    "comparison_to_dict",
    "dump_accounts_json",
    "export_trajectory_csv",
    "load_accounts_csv",
    "load_accounts_json",
    "result_to_dict",
]
