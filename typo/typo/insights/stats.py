"""
Execution statistics and prompt auto-suggestions.

Stats are recomputed from the log on every call. A suggestion is offered
only once an action has enough runs, and at most one per call:
reliability problems take priority over slow responses.
"""
import logging
import math
from typing import Optional

from ..constants import (
    LOW_SUCCESS_RATE,
    MIN_RUNS_FOR_SUGGESTION,
    SLOW_AVERAGE_MS,
    TOP_FAILURE_REASONS,
)
from .log_store import ExecutionLogStore
from .models import Action, ActionExecutionStats, ExecutionLogEntry, PromptAutoSuggestion

logger = logging.getLogger(__name__)


UNKNOWN_FAILURE = "Unknown failure"

# Checked in order against the lower-cased error message.
FAILURE_REASON_RULES: list[tuple[str, str]] = [
    ("no text selected", "No input text was selected."),
    ("api key", "API key was missing or invalid."),
    ("timeout", "The request timed out."),
    ("network", "Network issue during request."),
]

RELIABILITY_REQUIREMENTS = """Requirements:
- Return only the transformed text.
- Do not include explanations, markdown, or quotes.
- If input is ambiguous, still return a best-effort transformed result.
- Preserve original intent and key facts."""

CONCISENESS_REQUIREMENTS = """Requirements:
- Be concise and direct.
- Prefer one clear output with minimal verbosity.
- Avoid extra analysis unless explicitly requested."""


def _round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.floor(abs(value) + 0.5)) * (1 if value >= 0 else -1)


def normalize_failure_reason(message: Optional[str]) -> str:
    """
    Map a raw error message onto a failure bucket.

    Args:
        message: Error message of a failed run, if any

    Returns:
        A canonical reason for known failure kinds, otherwise the message
        itself ("Unknown failure." when there is none)
    """
    raw = (message if message is not None else UNKNOWN_FAILURE).lower()
    for needle, reason in FAILURE_REASON_RULES:
        if needle in raw:
            return reason
    return message if message is not None else f"{UNKNOWN_FAILURE}."


def compute_stats(
    entries: list[ExecutionLogEntry],
    action_id: str,
    top_reasons: int = TOP_FAILURE_REASONS,
) -> Optional[ActionExecutionStats]:
    """
    Aggregate the logged runs of one action.

    Args:
        entries: Execution log, oldest first
        action_id: Action to aggregate
        top_reasons: Number of failure reasons to keep

    Returns:
        Stats, or None if the action has no logged runs
    """
    filtered = [entry for entry in entries if entry.action_id == action_id]
    if not filtered:
        return None

    total = len(filtered)
    successful = sum(1 for entry in filtered if entry.success)
    average_duration = sum(entry.duration_ms for entry in filtered) / total

    # dict keeps first-seen order and sorted() is stable, so ties keep it too
    buckets: dict[str, int] = {}
    for entry in filtered:
        if entry.success:
            continue
        reason = normalize_failure_reason(entry.error_message)
        buckets[reason] = buckets.get(reason, 0) + 1

    ranked = sorted(buckets.items(), key=lambda item: item[1], reverse=True)

    return ActionExecutionStats(
        total_runs=total,
        successful_runs=successful,
        failed_runs=total - successful,
        success_rate=successful / total,
        average_duration_ms=average_duration,
        top_failure_reasons=[reason for reason, _ in ranked[:top_reasons]],
    )


def build_reliable_prompt(prompt: str, failure_reasons: list[str]) -> str:
    """Append the reliability requirements and known failure patterns to a prompt."""
    reasons = ""
    if failure_reasons:
        reasons = "\nKnown failure patterns to avoid:\n- " + "\n- ".join(failure_reasons)
    return f"{prompt}\n\n{RELIABILITY_REQUIREMENTS}{reasons}"


def build_fast_prompt(prompt: str) -> str:
    """Append the conciseness requirements to a prompt."""
    return f"{prompt}\n\n{CONCISENESS_REQUIREMENTS}"


def suggest(
    prompt: str,
    stats: Optional[ActionExecutionStats],
    min_runs: int = MIN_RUNS_FOR_SUGGESTION,
    low_success_rate: float = LOW_SUCCESS_RATE,
    slow_average_ms: float = SLOW_AVERAGE_MS,
) -> Optional[PromptAutoSuggestion]:
    """
    Derive a prompt suggestion from an action's stats.

    Args:
        prompt: The action's current prompt
        stats: Stats of the action, or None if it never ran
        min_runs: Runs required before anything is suggested
        low_success_rate: Success rate below which reliability is flagged
        slow_average_ms: Average duration above which speed is flagged

    Returns:
        A single suggestion, or None if no rule applies
    """
    if stats is None or stats.total_runs < min_runs:
        return None

    if stats.success_rate < low_success_rate:
        percent = _round_half_up(stats.success_rate * 100)
        return PromptAutoSuggestion(
            summary=(
                f"Success rate is {percent}% across {stats.total_runs} runs. "
                "Clarify output constraints and fallback behavior."
            ),
            suggested_prompt=build_reliable_prompt(prompt, stats.top_failure_reasons),
        )

    if stats.average_duration_ms > slow_average_ms:
        average = _round_half_up(stats.average_duration_ms)
        return PromptAutoSuggestion(
            summary=(
                f"Average response time is {average}ms. "
                "Tighten scope for faster responses."
            ),
            suggested_prompt=build_fast_prompt(prompt),
        )

    return None


class ExecutionStatsEngine:
    """
    Computes stats and suggestions over an execution log store.

    Thresholds are fixed per engine instance; the store is shared with
    whatever records action runs.
    """

    def __init__(
        self,
        store: ExecutionLogStore,
        min_runs: int = MIN_RUNS_FOR_SUGGESTION,
        low_success_rate: float = LOW_SUCCESS_RATE,
        slow_average_ms: float = SLOW_AVERAGE_MS,
    ) -> None:
        self._store = store
        self._min_runs = min_runs
        self._low_success_rate = low_success_rate
        self._slow_average_ms = slow_average_ms

    @property
    def store(self) -> ExecutionLogStore:
        """Get the underlying log store."""
        return self._store

    def record_entry(self, entry: ExecutionLogEntry) -> None:
        """Append an entry to the log."""
        self._store.append(entry)

    def compute_stats(self, action_id: str) -> Optional[ActionExecutionStats]:
        """Get stats for an action, or None if it never ran."""
        return compute_stats(self._store.entries_for(action_id), action_id)

    def suggestion(self, action: Action) -> Optional[PromptAutoSuggestion]:
        """Get a prompt suggestion for an action, if one applies."""
        stats = self.compute_stats(action.id)
        result = suggest(
            action.prompt,
            stats,
            min_runs=self._min_runs,
            low_success_rate=self._low_success_rate,
            slow_average_ms=self._slow_average_ms,
        )
        if result is not None:
            logger.debug(f"Suggestion for action '{action.name}': {result.summary}")
        return result

    def known_actions(self) -> list[Action]:
        """
        List actions that appear in the log, most recently run first.

        Name and prompt come from each action's latest entry.
        """
        seen: dict[str, Action] = {}
        for entry in reversed(self._store.entries()):
            if entry.action_id not in seen:
                seen[entry.action_id] = Action(
                    id=entry.action_id,
                    name=entry.action_name,
                    prompt=entry.prompt,
                )
        return list(seen.values())

    def find_action(self, query: str) -> Optional[Action]:
        """
        Find a logged action by id or case-insensitive name.

        Args:
            query: Action id or name

        Returns:
            The matching action, or None
        """
        query = query.strip()
        if not query:
            return None

        actions = self.known_actions()
        for action in actions:
            if action.id == query:
                return action
        for action in actions:
            if action.name.lower() == query.lower():
                return action
        return None
