"""
Configuration management for typo.
Handles loading, saving, and accessing configuration from JSON files and environment variables.
"""
import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Optional

from .constants import (
    CONFIG_FILE,
    DEFAULT_THEME,
    EXECUTION_LOG_FILE,
    LOW_SUCCESS_RATE,
    MAX_LOG_ENTRIES,
    MIN_RUNS_FOR_SUGGESTION,
    RELEASES_URL,
    SLOW_AVERAGE_MS,
)
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_THEME = "TYPO_THEME"
ENV_LOG_FILE = "TYPO_LOG_FILE"
ENV_NO_UPDATE_CHECK = "TYPO_NO_UPDATE_CHECK"


@dataclass
class RenderConfig:
    """Markdown rendering configuration."""
    theme: str = DEFAULT_THEME
    syntax_highlighting: bool = True
    line_numbers: bool = True


@dataclass
class InsightsConfig:
    """Execution log and suggestion configuration."""
    max_entries: int = MAX_LOG_ENTRIES
    min_runs: int = MIN_RUNS_FOR_SUGGESTION
    low_success_rate: float = LOW_SUCCESS_RATE
    slow_average_ms: float = SLOW_AVERAGE_MS
    log_file: str = str(EXECUTION_LOG_FILE)

    def validate(self) -> None:
        """
        Check value ranges.

        Raises:
            ConfigError: If a value is out of range
        """
        if self.max_entries < 1:
            raise ConfigError(f"max_entries must be positive, got {self.max_entries}")
        if self.min_runs < 1:
            raise ConfigError(f"min_runs must be positive, got {self.min_runs}")
        if not 0.0 <= self.low_success_rate <= 1.0:
            raise ConfigError(
                f"low_success_rate must be between 0 and 1, got {self.low_success_rate}"
            )
        if self.slow_average_ms < 0:
            raise ConfigError(f"slow_average_ms must be >= 0, got {self.slow_average_ms}")


@dataclass
class UpdateConfig:
    """Release update check configuration."""
    check_on_startup: bool = True
    releases_url: str = RELEASES_URL


@dataclass
class AppConfig:
    """Main application configuration."""
    render: RenderConfig = field(default_factory=RenderConfig)
    insights: InsightsConfig = field(default_factory=InsightsConfig)
    update: UpdateConfig = field(default_factory=UpdateConfig)


class ConfigManager:
    """
    Manages application configuration stored in a JSON file.

    Environment variables take precedence over config file values and are
    never written back to the file.
    """

    def __init__(self, config_file: Optional[Path] = None) -> None:
        """
        Initialize and load configuration.

        Args:
            config_file: Path of the JSON config file, defaults to ~/.typo/config.json
        """
        self._config_file = Path(config_file) if config_file else CONFIG_FILE
        self._config: AppConfig = AppConfig()
        self._load_config()

    @property
    def config_file(self) -> Path:
        """Get the config file path."""
        return self._config_file

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        if not self._config_file.exists():
            self._save_config()
            return

        try:
            with open(self._config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)

            if 'render' in data:
                self._config.render = RenderConfig(**data['render'])
            if 'insights' in data:
                self._config.insights = InsightsConfig(**data['insights'])
                self._config.insights.validate()
            if 'update' in data:
                self._config.update = UpdateConfig(**data['update'])
        except (json.JSONDecodeError, TypeError, ConfigError) as e:
            logger.warning(f"Failed to load config file {self._config_file}: {e}")
            self._config = AppConfig()

    def _apply_env_overrides(self, config: AppConfig) -> AppConfig:
        theme = os.environ.get(ENV_THEME)
        if theme:
            config.render.theme = theme

        log_file = os.environ.get(ENV_LOG_FILE)
        if log_file:
            config.insights.log_file = log_file

        if os.environ.get(ENV_NO_UPDATE_CHECK, "").strip().lower() in ("1", "true", "yes", "on"):
            config.update.check_on_startup = False

        return config

    def _save_config(self) -> None:
        """Save current configuration to JSON file."""
        data = {
            'render': asdict(self._config.render),
            'insights': asdict(self._config.insights),
            'update': asdict(self._config.update),
        }

        try:
            self._config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self._config_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.warning(f"Failed to save config file {self._config_file}: {e}")

    @property
    def config(self) -> AppConfig:
        """Get the effective configuration, with environment overrides applied."""
        effective = AppConfig(
            render=RenderConfig(**asdict(self._config.render)),
            insights=InsightsConfig(**asdict(self._config.insights)),
            update=UpdateConfig(**asdict(self._config.update)),
        )
        return self._apply_env_overrides(effective)

    @property
    def render(self) -> RenderConfig:
        """Get rendering configuration."""
        return self.config.render

    @property
    def insights(self) -> InsightsConfig:
        """Get insights configuration."""
        return self.config.insights

    @property
    def update(self) -> UpdateConfig:
        """Get update check configuration."""
        return self.config.update

    def update_render(self, **kwargs: Any) -> None:
        """Update rendering configuration."""
        for key, value in kwargs.items():
            if hasattr(self._config.render, key):
                setattr(self._config.render, key, value)
        self._save_config()

    def update_insights(self, **kwargs: Any) -> None:
        """
        Update insights configuration.

        Raises:
            ConfigError: If the resulting values are invalid; nothing is changed
        """
        candidate = InsightsConfig(**asdict(self._config.insights))
        for key, value in kwargs.items():
            if hasattr(candidate, key):
                setattr(candidate, key, value)
        candidate.validate()
        self._config.insights = candidate
        self._save_config()

    def save(self) -> None:
        """Explicitly save configuration."""
        self._save_config()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._config = AppConfig()
        self._load_config()

    def reset(self) -> None:
        """Reset configuration to defaults."""
        self._config = AppConfig()
        self._save_config()
