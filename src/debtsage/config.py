"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_HORIZON_MONTHS = 600
DEFAULT_EPSILON = Decimal("0.01")
DEFAULT_WHAT_IF_INCREMENTS: tuple[Decimal, ...] = (
    Decimal("1000"),
    Decimal("2500"),
    Decimal("5000"),
)


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_decimal(name: str, default: Decimal) -> Decimal:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return Decimal(value.strip())
    except InvalidOperation as exc:
        raise ValueError(f"{name} must be a decimal number, got {value!r}") from exc


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def parse_increments(raw: str) -> tuple[Decimal, ...]:
    """Parse a comma-separated list of what-if increments such as ``"1000,2500"``."""

    increments: list[Decimal] = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            value = Decimal(chunk)
        except InvalidOperation as exc:
            raise ValueError(f"what-if increment must be a number, got {chunk!r}") from exc
        if not value.is_finite() or value <= 0:
            raise ValueError(f"what-if increment must be positive, got {chunk!r}")
        increments.append(value)
    return tuple(increments)


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "DebtSage"
    LOG_FILENAME = "debtsage.log"
    LOG_MAX_BYTES = 10 * 1024 * 1024
    LOG_BACKUP_COUNT = 5

    def __init__(self) -> None:
        self.DEV_MODE = _env_bool("DEBTSAGE_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.HORIZON_MONTHS = _env_int("DEBTSAGE_HORIZON_MONTHS", DEFAULT_HORIZON_MONTHS)
        self.EPSILON = _env_decimal("DEBTSAGE_EPSILON", DEFAULT_EPSILON)
        raw_increments = os.getenv("DEBTSAGE_WHAT_IF_INCREMENTS")
        self.WHAT_IF_INCREMENTS = (
            parse_increments(raw_increments)
            if raw_increments is not None
            else DEFAULT_WHAT_IF_INCREMENTS
        )
        if self.HORIZON_MONTHS <= 0:
            raise ValueError("DEBTSAGE_HORIZON_MONTHS must be a positive number of months.")
        if not self.EPSILON.is_finite() or self.EPSILON < 0:
            raise ValueError("DEBTSAGE_EPSILON must be a non-negative amount.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where log files live."""

        data_root = os.getenv("DEBTSAGE_DATA_DIR", "instance")
        return Path(data_root).expanduser().resolve()

    def simulation_options(self) -> dict[str, object]:
        """Expose keyword overrides for ``simulate``/``compare``."""

        return {"horizon": self.HORIZON_MONTHS, "epsilon": self.EPSILON}


class DevConfig(BaseConfig):
    """Development configuration with verbose console logging."""

    DEBUG = True
    TESTING = False
