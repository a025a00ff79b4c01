"""Static identity constants and environment-driven settings."""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from skiff.shared.models import AppIdentity

APP_ID = "io.skiff.Skiff"
APP_NAME = "Skiff"
APP_VERSION = "1.0.0"
APP_ORGANIZATION = "Skiff"
APP_AUTHORS = ("The Skiff developers",)
TRANSLATION_DOMAIN = "skiff"

IDENTITY = AppIdentity(
    identifier=APP_ID,
    name=APP_NAME,
    version=APP_VERSION,
    authors=APP_AUTHORS,
    organization=APP_ORGANIZATION,
    comments="A small, single-window desktop application.",
    website="https://skiff.io",
    copyright="Copyright © The Skiff developers",
)

_PACKAGE_DIR = Path(__file__).resolve().parent.parent


@dataclass
class Settings:
    """Runtime settings read from the environment."""

    log_level: int = logging.INFO
    log_file: Optional[Path] = None
    locale: Optional[str] = None  # None means QLocale.system()
    resource_dir: Path = _PACKAGE_DIR / "resources"
    translation_dir: Path = _PACKAGE_DIR / "translations"


def _parse_level(value: str) -> int:
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid SKIFF_LOG_LEVEL: {value}")
    return level


def load_settings(environ: Optional[dict] = None) -> Settings:
    """Build Settings from SKIFF_* environment variables."""
    env = os.environ if environ is None else environ
    settings = Settings()

    if env.get("SKIFF_LOG_LEVEL"):
        settings.log_level = _parse_level(env["SKIFF_LOG_LEVEL"])
    if env.get("SKIFF_LOG_FILE"):
        settings.log_file = Path(env["SKIFF_LOG_FILE"])
    if env.get("SKIFF_LOCALE"):
        settings.locale = env["SKIFF_LOCALE"]

    return settings
