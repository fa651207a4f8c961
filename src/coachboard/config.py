"""Configuration management for Coachboard."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

COACHBOARD_HOME = Path(os.environ.get("COACHBOARD_HOME", Path.home() / "coachboard"))
CONFIG_FILE = COACHBOARD_HOME / "config" / "coachboard.conf"
DATA_DIR = COACHBOARD_HOME / "data"

WEEK_ORDERS = ("today", "sunday", "monday")


@dataclass
class Config:
    """Coachboard configuration."""

    data_dir: str = ""
    timezone: str = "America/New_York"
    # Display order for the week view: starting today, Sunday-first or Monday-first
    week_starts_on: str = "today"
    # Telegram bot settings
    telegram_bot_token: str = ""
    telegram_allowed_users: list[int] = field(default_factory=list)
    telegram_agenda_time: str = "06:30"

    def resolved_data_dir(self) -> Path:
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from coachboard.conf."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "data_dir":
                config.data_dir = value
            case "timezone":
                config.timezone = value
            case "week_starts_on":
                if value.lower() in WEEK_ORDERS:
                    config.week_starts_on = value.lower()
                else:
                    logger.warning(f"Ignoring WEEK_STARTS_ON={value!r}, expected one of {WEEK_ORDERS}")
            case "telegram_bot_token":
                config.telegram_bot_token = value
            case "telegram_allowed_users":
                try:
                    config.telegram_allowed_users = [int(u.strip()) for u in value.split(",") if u.strip()]
                except ValueError:
                    logger.warning(f"Failed to parse TELEGRAM_ALLOWED_USERS: {value!r}")
            case "telegram_agenda_time":
                config.telegram_agenda_time = value
            case _:
                logger.debug(f"Unknown config key: {key}")

    return config
