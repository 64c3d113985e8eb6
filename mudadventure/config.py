"""Tracker configuration and logging setup."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path

from dotenv import load_dotenv

from mudadventure.parser import ClassifierRules
from mudadventure.window import DEFAULT_WINDOW_SIZE

logger = logging.getLogger(__name__)

CONFIG_FILE = "mudadventure.json"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Environment overrides, e.g. MUDADVENTURE_LOG_LEVEL=DEBUG in .env
_ENV_PREFIX = "MUDADVENTURE_"


@dataclass
class TrackerConfig:
    """Tracker settings."""

    # Text stream
    window_size: int = DEFAULT_WINDOW_SIZE

    # Rules with less certain server wording
    detect_lost_level: bool = True
    detect_accomplished_task: bool = True
    detect_died: bool = True

    # Journal
    journal_max_lines: int = 1024

    # Logging
    log_level: str = "INFO"
    log_file: str = ""

    def classifier_rules(self) -> ClassifierRules:
        return ClassifierRules(
            lost_level=self.detect_lost_level,
            accomplished_task=self.detect_accomplished_task,
            died=self.detect_died,
        )

    def save(self, path: str | Path = CONFIG_FILE) -> None:
        """Save config to JSON file."""
        Path(path).write_text(
            json.dumps(asdict(self), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    @classmethod
    def load(cls, path: str | Path = CONFIG_FILE) -> TrackerConfig:
        """Load config from JSON file, using defaults for missing fields."""
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (FileNotFoundError, json.JSONDecodeError):
            return cls()
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: not a JSON object", path)
            return cls()
        defaults = asdict(cls())
        # Unknown keys from older/newer versions are dropped
        defaults.update({k: v for k, v in data.items() if k in defaults})
        return cls(**defaults)

    @classmethod
    def from_env(cls, path: str | Path | None = None) -> TrackerConfig:
        """Load config (file from MUDADVENTURE_CONFIG or ``path``) plus env overrides."""
        load_dotenv()
        config_path = path or os.environ.get(f"{_ENV_PREFIX}CONFIG", CONFIG_FILE)
        config = cls.load(config_path)
        for name, default in asdict(config).items():
            raw = os.environ.get(f"{_ENV_PREFIX}{name.upper()}")
            if raw is None:
                continue
            try:
                setattr(config, name, _coerce(raw, default))
            except ValueError:
                logger.warning("Ignoring %s%s=%r: invalid value", _ENV_PREFIX, name.upper(), raw)
        return config


def _coerce(raw: str, default: object) -> object:
    if isinstance(default, bool):
        lowered = raw.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ValueError(raw)
    if isinstance(default, int):
        return int(raw)
    return raw


def configure_logging(config: TrackerConfig) -> None:
    """Set up root logging from config: stderr, plus a file if ``log_file`` is set."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
