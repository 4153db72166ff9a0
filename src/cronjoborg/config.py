from dataclasses import dataclass
from functools import lru_cache
import os

from cronjoborg.client import DEFAULT_TIMEOUT_SECONDS


def _to_float(value: str | None, *, default: float, minimum: float) -> float:
    if value is None or not value.strip():
        return default
    parsed = float(value)
    return max(minimum, parsed)


@dataclass(frozen=True)
class Settings:
    api_key: str
    timeout_seconds: float
    log_level: str


@lru_cache
def get_settings() -> Settings:
    return Settings(
        api_key=os.getenv("CRONJOB_API_KEY", "").strip(),
        timeout_seconds=_to_float(
            os.getenv("CRONJOB_TIMEOUT_SECONDS"),
            default=DEFAULT_TIMEOUT_SECONDS,
            minimum=0.1,
        ),
        log_level=os.getenv("CRONJOB_LOG_LEVEL", "WARNING").strip().upper(),
    )
