"""
Constants and configuration defaults for typo.
"""
from pathlib import Path
from typing import Final

APP_NAME: Final[str] = "typo"
APP_VERSION: Final[str] = "1.0.0"
APP_DESCRIPTION: Final[str] = "Markdown preview and execution insights for AI text actions"

CONFIG_DIR: Final[Path] = Path.home() / ".typo"
CONFIG_FILE: Final[Path] = CONFIG_DIR / "config.json"
EXECUTION_LOG_FILE: Final[Path] = CONFIG_DIR / "execution_logs.json"
THEMES_DIR: Final[Path] = CONFIG_DIR / "themes"

DEFAULT_THEME: Final[str] = "default"

SLASH_PREFIX: Final[str] = "/"

# Execution log
MAX_LOG_ENTRIES: Final[int] = 2000

# Auto-suggestion thresholds
MIN_RUNS_FOR_SUGGESTION: Final[int] = 5
LOW_SUCCESS_RATE: Final[float] = 0.7
SLOW_AVERAGE_MS: Final[float] = 10_000
TOP_FAILURE_REASONS: Final[int] = 3

# Releases
RELEASES_URL: Final[str] = "https://api.github.com/repos/ELPROFUG0/TexTab/releases/latest"
UPDATE_CHECK_TIMEOUT: Final[float] = 3.0
