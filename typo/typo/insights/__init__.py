"""Execution logging, statistics and prompt suggestions for typo."""
from .models import Action, ActionExecutionStats, ExecutionLogEntry, PromptAutoSuggestion
from .log_store import (
    ExecutionLogStore,
    InMemoryLogPersistence,
    JsonFileLogPersistence,
    LogPersistence,
)
from .stats import ExecutionStatsEngine, compute_stats, normalize_failure_reason, suggest

__all__ = [
    'Action', 'ActionExecutionStats', 'ExecutionLogEntry', 'PromptAutoSuggestion',
    'ExecutionLogStore', 'LogPersistence', 'JsonFileLogPersistence', 'InMemoryLogPersistence',
    'ExecutionStatsEngine', 'compute_stats', 'normalize_failure_reason', 'suggest',
]
