"""
Central configuration

Values come from environment variables with defaults suitable for the public
openFDA endpoint. Read once per process via get_settings().
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

OPENFDA_BASE = "https://api.fda.gov"
REFILL_WINDOW_DAYS = 7

def _float_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)

@dataclass(frozen=True)
class Settings:
    openfda_base: str = OPENFDA_BASE
    request_timeout: float = 10.0
    min_request_interval: float = 0.1  # 100ms between requests
    label_cache_size: int = 512
    label_cache_ttl: Optional[float] = None  # seconds; None keeps entries for the process lifetime
    refill_window_days: int = REFILL_WINDOW_DAYS

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            openfda_base=os.getenv("OPENFDA_BASE", OPENFDA_BASE).rstrip("/"),
            request_timeout=_float_env("OPENFDA_TIMEOUT", 10.0),
            min_request_interval=_float_env("OPENFDA_MIN_INTERVAL", 0.1),
            label_cache_size=int(os.getenv("LABEL_CACHE_SIZE", "512")),
            label_cache_ttl=_float_env("LABEL_CACHE_TTL", None),
            refill_window_days=int(os.getenv("REFILL_WINDOW_DAYS", str(REFILL_WINDOW_DAYS))),
        )

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()

def setup_logging(verbose: bool = False) -> None:
    """Configure logging for scripts embedding the engine"""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
