"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MAX_MONTHS = 600  # 50 years
DEFAULT_MAX_FORTNIGHTS = 1300  # ~50 years


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_positive_int(name: str, default: int) -> int:
    """Read a strictly positive integer from the environment."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Barefoot"
    LOG_FILENAME = "barefoot.log"

    def __init__(self, data_dir: Path | str | None = None) -> None:
        self.DATA_DIR = self._resolve_data_dir(data_dir)
        self.DEV_MODE = _env_bool("BAREFOOT_DEV_MODE", default=True)
        self.CURRENCY = os.getenv("BAREFOOT_CURRENCY", "AUD").strip().upper() or "AUD"
        self.MAX_MONTHS = _env_positive_int("BAREFOOT_MAX_MONTHS", DEFAULT_MAX_MONTHS)
        self.MAX_FORTNIGHTS = _env_positive_int("BAREFOOT_MAX_FORTNIGHTS", DEFAULT_MAX_FORTNIGHTS)

    def _resolve_data_dir(self, override: Path | str | None = None) -> Path:
        """Return the directory where logs and exports live."""

        data_root = override if override is not None else os.getenv("BAREFOOT_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path


class TestConfig(BaseConfig):
    """Configuration used by the test-suite; quiet console output."""

    __test__ = False  # not a pytest class

    def __init__(self, data_dir: Path | str | None = None) -> None:
        super().__init__(data_dir)
        self.DEV_MODE = False


__all__ = ["BaseConfig", "TestConfig", "DEFAULT_MAX_MONTHS", "DEFAULT_MAX_FORTNIGHTS"]
