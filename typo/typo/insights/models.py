"""
Data model for action execution insights.

Entries are written once per action run and never modified. Stats and
suggestions are derived from them on demand.
"""
from dataclasses import dataclass, field
from typing import Any, Optional

from ..exceptions import LogFormatError


@dataclass(frozen=True)
class Action:
    """A user-defined AI transformation: a named prompt with a shortcut."""
    id: str
    name: str
    prompt: str
    icon: str = ""
    shortcut: str = ""


@dataclass(frozen=True)
class ExecutionLogEntry:
    """Record of a single action run.

    Attributes:
        id: Unique entry id
        timestamp: Completion time as epoch seconds
        action_id: Id of the action that ran
        action_name: Action name at the time of the run
        prompt: Prompt that was sent
        provider: Provider name, if known
        model_id: Model id, if known
        duration_ms: Wall time of the run in milliseconds
        input_length: Input length in characters
        output_length: Output length in characters, 0 when there was none
        success: Whether the run produced a result
        error_message: Error text of a failed run
    """
    id: str
    timestamp: float
    action_id: str
    action_name: str
    prompt: str
    provider: Optional[str] = None
    model_id: Optional[str] = None
    duration_ms: float = 0.0
    input_length: int = 0
    output_length: int = 0
    success: bool = True
    error_message: Optional[str] = None

    def __post_init__(self) -> None:
        if self.duration_ms < 0:
            raise ValueError(f"duration_ms must be >= 0, got {self.duration_ms}")
        if self.input_length < 0 or self.output_length < 0:
            raise ValueError("input_length and output_length must be >= 0")

    def to_dict(self) -> dict[str, Any]:
        """Convert to the on-disk record format."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "actionId": self.action_id,
            "actionName": self.action_name,
            "prompt": self.prompt,
            "provider": self.provider,
            "modelId": self.model_id,
            "durationMs": self.duration_ms,
            "inputLength": self.input_length,
            "outputLength": self.output_length,
            "success": self.success,
            "errorMessage": self.error_message,
        }

    @classmethod
    def from_dict(cls, data: Any) -> 'ExecutionLogEntry':
        """
        Create an entry from an on-disk record.

        Args:
            data: Decoded JSON object

        Returns:
            ExecutionLogEntry

        Raises:
            LogFormatError: If required fields are missing or invalid
        """
        if not isinstance(data, dict):
            raise LogFormatError(f"Expected an object, got {type(data).__name__}", data)

        try:
            return cls(
                id=str(data["id"]),
                timestamp=float(data["timestamp"]),
                action_id=str(data["actionId"]),
                action_name=str(data.get("actionName", "")),
                prompt=str(data.get("prompt", "")),
                provider=_optional_str(data, "provider"),
                model_id=_optional_str(data, "modelId"),
                duration_ms=float(data.get("durationMs", 0.0)),
                input_length=int(data.get("inputLength", 0)),
                output_length=int(data.get("outputLength", 0)),
                success=_required_bool(data, "success"),
                error_message=_optional_str(data, "errorMessage"),
            )
        except KeyError as e:
            raise LogFormatError(f"Missing field {e}", data) from e
        except (TypeError, ValueError) as e:
            raise LogFormatError(f"Invalid record: {e}", data) from e


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise LogFormatError(f"Field '{key}' must be a string or null", data)
    return value


def _required_bool(data: dict, key: str) -> bool:
    value = data[key]
    if not isinstance(value, bool):
        raise LogFormatError(f"Field '{key}' must be a boolean", data)
    return value


@dataclass(frozen=True)
class ActionExecutionStats:
    """Aggregated outcome of all logged runs of one action."""
    total_runs: int
    successful_runs: int
    failed_runs: int
    success_rate: float
    average_duration_ms: float
    top_failure_reasons: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PromptAutoSuggestion:
    """A human-readable finding plus an optional revised prompt."""
    summary: str
    suggested_prompt: Optional[str] = None
