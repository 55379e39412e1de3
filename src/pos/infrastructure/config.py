"""Runtime settings, read from the environment and an optional ``.env``."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# When installed in editable mode the project root is the repo root.
ROOT_DIR = Path(__file__).resolve().parents[3]
load_dotenv(dotenv_path=ROOT_DIR / ".env")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int) -> int:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return int(v)


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    currency: str
    cashier_id: int
    log_level: str


def load_settings() -> Settings:
    return Settings(
        data_dir=Path(_get_env("POS_DATA_DIR", default=str(ROOT_DIR / "data")) or ""),
        currency=(_get_env("POS_CURRENCY", default="LKR") or "LKR").upper(),
        cashier_id=_get_int("POS_CASHIER_ID", "POS_USER_ID", default=1),
        log_level=(_get_env("POS_LOG_LEVEL", default="WARNING") or "WARNING").upper(),
    )
