"""Configuration for the finance core.

Values come from environment variables with defaults relative to the
project root. Policy thresholds live next to the code that applies them and
are not configurable.
"""
import logging
import os
from pathlib import Path
from typing import Optional, Union

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()


def _get_int_env(name: str, default: int) -> int:
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer.") from exc


DATA_DIR = Path(os.getenv("FINANCE_DATA_DIR", _PROJECT_ROOT / "data"))
SEED_PATH = Path(os.getenv("FINANCE_SEED_PATH", DATA_DIR / "seed.json"))
LOG_LEVEL = os.getenv("FINANCE_LOG_LEVEL", "INFO").upper()
TREND_MONTHS = _get_int_env("FINANCE_TREND_MONTHS", 6)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[Union[str, int]] = None) -> None:
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )
    logging.getLogger(__name__).debug("Logging configured.")
