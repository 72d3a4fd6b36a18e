"""Configuration loading and saving (TOML)."""

from __future__ import annotations

import logging
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from jelly_snippets.constants import (
    CONFIG_FILE,
    DEFAULT_ENTER_TRIGGER,
    DEFAULT_PART_DIVIDER,
    DEFAULT_SNIPPET_DIVIDER,
    DEFAULT_SNIPPET_SOURCE,
    DEFAULT_SPACE_TRIGGER,
    DEFAULT_TAB_TRIGGER,
    WEB_DEFAULT_HOST,
    WEB_DEFAULT_PORT,
)

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)


@dataclass
class SnippetsConfig:
    """Snippet source and how to split it."""

    source: str = DEFAULT_SNIPPET_SOURCE
    source_file: str | None = None  # read the source from this file instead
    snippet_divider: str = DEFAULT_SNIPPET_DIVIDER  # "\\n" = one snippet per line
    part_divider: str = DEFAULT_PART_DIVIDER
    multiline_lhs: bool = True

    def read_source(self) -> str:
        """Return the snippet source text, preferring ``source_file``."""
        if self.source_file:
            path = Path(self.source_file).expanduser()
            try:
                return path.read_text(encoding="utf-8")
            except OSError:
                logger.exception("Failed to read snippet file %s, using inline source", path)
        return self.source

    def table_key(self) -> tuple[str, str, str]:
        """Everything the compiled table depends on."""
        return (self.read_source(), self.snippet_divider, self.part_divider)


@dataclass
class TriggerConfig:
    """Automatic trigger modes: "disabled" | "enabled" | "enabled-with-whitespace"."""

    space: str = DEFAULT_SPACE_TRIGGER
    tab: str = DEFAULT_TAB_TRIGGER
    enter: str = DEFAULT_ENTER_TRIGGER


@dataclass
class WebConfig:
    """Web API configuration."""

    host: str = WEB_DEFAULT_HOST
    port: int = WEB_DEFAULT_PORT


@dataclass
class AppConfig:
    """Root application configuration."""

    snippets: SnippetsConfig = field(default_factory=SnippetsConfig)
    triggers: TriggerConfig = field(default_factory=TriggerConfig)
    web: WebConfig = field(default_factory=WebConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> AppConfig:
        """Load config from TOML file, falling back to defaults."""
        config_path = path or CONFIG_FILE
        config = cls()

        if not config_path.exists():
            logger.info("No config file found at %s, using defaults", config_path)
            return config

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            config = _merge_config(config, data)
            logger.info("Loaded config from %s", config_path)
        except Exception:
            logger.exception("Failed to load config from %s, using defaults", config_path)
            config = cls()

        return config

    def save(self, path: Path | None = None) -> None:
        """Save config to TOML file."""
        config_path = path or CONFIG_FILE
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "wb") as f:
            tomli_w.dump(_strip_none(asdict(self)), f)
        logger.info("Saved config to %s", config_path)


def _merge_config(config: AppConfig, data: dict[str, Any]) -> AppConfig:
    """Merge a TOML dict into an AppConfig, preserving defaults for missing keys."""
    sections = {
        "snippets": config.snippets,
        "triggers": config.triggers,
        "web": config.web,
    }
    for name, section in sections.items():
        values = data.get(name)
        if not isinstance(values, dict):
            continue
        for key, val in values.items():
            if hasattr(section, key):
                setattr(section, key, val)
            else:
                logger.warning("Ignoring unknown config key %s.%s", name, key)

    return config


def _strip_none(d: dict[str, Any]) -> dict[str, Any]:
    """Recursively remove None values from a dict (TOML has no null)."""
    result: dict[str, Any] = {}
    for k, v in d.items():
        if isinstance(v, dict):
            result[k] = _strip_none(v)
        elif v is not None:
            result[k] = v
    return result
