"""Configuration loading for PropJournal.

Settings live in a TOML file at ``~/.config/propjournal/config.toml``
(override with the ``PROPJOURNAL_CONFIG`` environment variable). A missing
or unreadable file is not an error: every setting has a default, so the
journal works out of the box.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import toml
from pydantic import BaseModel, Field, ValidationError

from propjournal.stats.engine import INITIAL_BALANCE, PROFIT_GOAL

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "propjournal"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"
DEFAULT_DB_PATH = DEFAULT_CONFIG_DIR / "journal.db"

CONFIG_ENV_VAR = "PROPJOURNAL_CONFIG"


class JournalConfig(BaseModel):
    """Resolved journal settings."""

    initial_balance: float = Field(
        default=INITIAL_BALANCE, description="Funded account starting balance"
    )
    profit_goal: float = Field(
        default=PROFIT_GOAL, gt=0, description="Total payouts targeted"
    )
    reset_below_goal: bool = Field(
        default=True,
        description="Clear the celebration flag when payouts fall below the goal",
    )
    openai_api_key: Optional[str] = Field(
        default=None, description="OpenAI key (falls back to OPENAI_API_KEY)"
    )
    openai_model: Optional[str] = Field(
        default=None, description="Model override (falls back to OPENAI_MODEL)"
    )
    db_path: Path = Field(default=DEFAULT_DB_PATH, description="SQLite journal file")
    log_level: str = Field(default="WARNING", description="Logging level")

    model_config = {"frozen": True}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "JournalConfig":
        """Build a config from the sectioned TOML layout.

        Args:
            data: Parsed TOML document.

        Returns:
            JournalConfig with defaults for anything not set.
        """
        account = data.get("account", {})
        goal = data.get("goal", {})
        openai = data.get("openai", {})
        storage = data.get("storage", {})
        logging_section = data.get("logging", {})

        values: dict[str, Any] = {
            "initial_balance": account.get("initial_balance"),
            "profit_goal": account.get("profit_goal"),
            "reset_below_goal": goal.get("reset_below_goal"),
            # Empty strings in the template mean "not set"
            "openai_api_key": openai.get("api_key") or None,
            "openai_model": openai.get("model") or None,
            "db_path": Path(storage["db_path"]).expanduser() if storage.get("db_path") else None,
            "log_level": logging_section.get("level"),
        }
        return cls(**{k: v for k, v in values.items() if v is not None})


def get_config_path() -> Path:
    """Get the config file path, honouring the environment override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config(config_path: Optional[Path] = None) -> JournalConfig:
    """Load configuration from disk.

    Args:
        config_path: Optional explicit path. Uses get_config_path() if None.

    Returns:
        JournalConfig. Defaults are used when the file is missing or invalid.
    """
    path = config_path or get_config_path()

    if not path.exists():
        return JournalConfig()

    try:
        return JournalConfig.from_dict(toml.load(path))
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Could not read config %s: %s", path, e)
    except ValidationError as e:
        logger.warning("Invalid settings in %s: %s", path, e)

    return JournalConfig()


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Create a template configuration file.

    Args:
        config_path: Where to write the file. Uses get_config_path() if None.

    Returns:
        Path of the written file.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    template = {
        "account": {
            "initial_balance": INITIAL_BALANCE,
            "profit_goal": PROFIT_GOAL,
        },
        "goal": {
            "reset_below_goal": True,
        },
        "openai": {
            "api_key": "",  # Leave empty to use OPENAI_API_KEY env var
            "model": "",
        },
        "storage": {
            "db_path": str(DEFAULT_DB_PATH),
        },
        "logging": {
            "level": "WARNING",
        },
    }

    with open(path, "w") as f:
        toml.dump(template, f)

    return path
