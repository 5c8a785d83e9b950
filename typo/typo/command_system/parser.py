"""
Command parser for typo.
Parses user input into slash commands and markdown to preview.
"""
from dataclasses import dataclass

from ..constants import SLASH_PREFIX


@dataclass
class ParsedInput:
    """Result of parsing user input."""
    type: str  # 'command', 'markdown', 'empty'
    command: str = ""
    args: str = ""
    raw: str = ""


class CommandParser:
    """
    Parser for user input in the interactive session.

    Handles parsing of:
    - Slash commands (/command args)
    - Everything else, which is previewed as markdown
    """

    def parse(self, input_text: str) -> ParsedInput:
        """
        Parse user input into a structured result.

        Args:
            input_text: Raw user input

        Returns:
            ParsedInput with parsed components
        """
        text = input_text.strip()

        if not text:
            return ParsedInput(type="empty", raw=input_text)

        if text.startswith(SLASH_PREFIX) and not text.startswith(SLASH_PREFIX * 2):
            return self._parse_command(text)

        # Markdown keeps its original indentation
        return ParsedInput(type="markdown", raw=input_text)

    def _parse_command(self, text: str) -> ParsedInput:
        """Parse a slash command."""
        without_prefix = text[len(SLASH_PREFIX):]

        parts = without_prefix.split(maxsplit=1)
        command = parts[0].lower() if parts else ""
        args = parts[1] if len(parts) > 1 else ""

        return ParsedInput(
            type="command",
            command=command,
            args=args,
            raw=text
        )
