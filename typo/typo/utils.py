"""
Utility functions for typo.
"""
import time
from datetime import datetime
from typing import Optional


def truncate_string(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    Truncate a string to a maximum length.

    Args:
        text: The string to truncate
        max_length: Maximum length of the output string
        suffix: Suffix to append when truncating

    Returns:
        Truncated string
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix


def format_timestamp(timestamp: Optional[float] = None, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    """
    Format a timestamp to a human-readable string.

    Args:
        timestamp: Unix timestamp (uses current time if None)
        fmt: strftime format string

    Returns:
        Formatted timestamp string
    """
    if timestamp is None:
        timestamp = time.time()
    return datetime.fromtimestamp(timestamp).strftime(fmt)


def format_duration_ms(milliseconds: float) -> str:
    """
    Format a duration in milliseconds to a human-readable string.

    Args:
        milliseconds: Duration in milliseconds

    Returns:
        Formatted duration (e.g., "850ms", "2.4s", "1m 5s")
    """
    if milliseconds < 1000:
        return f"{milliseconds:.0f}ms"
    seconds = milliseconds / 1000
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {int(seconds % 60)}s"


def format_percent(ratio: float) -> str:
    """Format a 0-1 ratio as a whole percentage."""
    return f"{ratio * 100:.0f}%"
