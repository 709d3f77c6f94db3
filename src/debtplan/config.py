"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from .services.debts import PayoffStrategy
from .services.projection import DEFAULT_MAX_PERIODS

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}.") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "DebtPlan"
    LOG_FILENAME = "debtplan.log"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("DEBTPLAN_DEV_MODE", default=True)
        self.MAX_PERIODS = _env_int("DEBTPLAN_MAX_PERIODS", DEFAULT_MAX_PERIODS)
        if self.MAX_PERIODS <= 0:
            raise ValueError("DEBTPLAN_MAX_PERIODS must be greater than zero.")
        strategy = os.getenv("DEBTPLAN_DEFAULT_STRATEGY", PayoffStrategy.AVALANCHE.value)
        try:
            self.DEFAULT_STRATEGY = PayoffStrategy(strategy.strip().lower())
        except ValueError as exc:
            raise ValueError(
                "DEBTPLAN_DEFAULT_STRATEGY must be 'snowball' or 'avalanche'."
            ) from exc

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs and exports live."""

        data_root = os.getenv("DEBTPLAN_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Fall back to user-local storage when the configured location is read-only.
            fallback_path = Path.home() / f".{self.APP_NAME.lower()}"
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()


class DevConfig(BaseConfig):
    """Development configuration: console logging stays at INFO regardless of env."""

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
