"""Runtime settings read from the environment (and .env via python-dotenv at the entry point)."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from startopology.i18n import LANGUAGES

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    input_path: Path = Path("stars.txt")
    output_dir: Path = Path(".")
    lang: str = "en"
    log_level: str = "WARNING"
    conventional_declination: bool = False  # 60/3600 declination divisors
    strict: bool = False  # Zero-sum distance rows are fatal


def _flag(env: Mapping[str, str], name: str) -> bool:
    raw = env.get(name, "").strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from STARTOPOLOGY_* variables.

    Raises:
        ValueError: Unsupported language or log level, or malformed boolean flag.
    """
    if env is None:
        env = os.environ
    lang = env.get("STARTOPOLOGY_LANG", "en").strip().lower()
    if lang not in LANGUAGES:
        raise ValueError(f"STARTOPOLOGY_LANG must be one of {LANGUAGES}, got {lang!r}")
    log_level = env.get("STARTOPOLOGY_LOG_LEVEL", "WARNING").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(
            f"STARTOPOLOGY_LOG_LEVEL must be one of {LOG_LEVELS}, got {log_level!r}"
        )
    return Settings(
        input_path=Path(env.get("STARTOPOLOGY_INPUT", "stars.txt")),
        output_dir=Path(env.get("STARTOPOLOGY_OUTPUT_DIR", ".")),
        lang=lang,
        log_level=log_level,
        conventional_declination=_flag(env, "STARTOPOLOGY_CONVENTIONAL_DEC"),
        strict=_flag(env, "STARTOPOLOGY_STRICT"),
    )
