"""
Base classes for the command system in typo.
"""
import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, List, Optional

from rich.console import Console

from ..exceptions import CommandError
from ..insights import Action, ExecutionLogStore, ExecutionStatsEngine
from ..rendering import MarkdownRenderer

if TYPE_CHECKING:
    from ..config import ConfigManager
    from .registry import CommandRegistry


class CommandStatus(Enum):
    """Status of command execution."""
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class CommandResult:
    """Result of a command execution.

    ``message`` is markdown and is rendered by the CLI.
    """
    status: CommandStatus = CommandStatus.SUCCESS
    message: str = ""
    data: Any = None
    should_exit: bool = False
    errors: List[str] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        """Check if command succeeded."""
        return self.status == CommandStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        """Check if command failed."""
        return self.status == CommandStatus.ERROR

    @classmethod
    def success(cls, message: str = "", data: Any = None) -> 'CommandResult':
        """Create a success result."""
        return cls(status=CommandStatus.SUCCESS, message=message, data=data)

    @classmethod
    def error(cls, message: str, errors: Optional[List[str]] = None) -> 'CommandResult':
        """Create an error result."""
        return cls(
            status=CommandStatus.ERROR,
            message=message,
            errors=errors or [message]
        )

    @classmethod
    def exit(cls, message: str = "Goodbye!") -> 'CommandResult':
        """Create an exit result."""
        return cls(status=CommandStatus.SUCCESS, message=message, should_exit=True)


@dataclass
class CommandContext:
    """Collaborators handed to every command."""
    store: ExecutionLogStore
    engine: ExecutionStatsEngine
    renderer: MarkdownRenderer
    console: Console
    config: Optional['ConfigManager'] = None
    registry: Optional['CommandRegistry'] = None


class SlashCommand(ABC):
    """
    Base class for all slash commands.

    All commands must inherit from this class and implement the run method.
    Commands are auto-discovered and registered based on their class attributes.
    """

    name: str = ""
    description: str = ""
    aliases: List[str] = []
    usage: str = ""
    examples: List[str] = []
    hidden: bool = False

    def __init__(self) -> None:
        """Initialize the command."""
        if not self.name:
            self.name = self.__class__.__name__.lower().replace("command", "")

    @abstractmethod
    def run(self, args: str, context: CommandContext) -> CommandResult:
        """
        Execute the command.

        Args:
            args: Command arguments as a string
            context: Stores, renderer and console of the running session

        Returns:
            CommandResult with execution status

        Raises:
            CommandError: For invalid arguments
        """
        pass

    def get_help(self) -> str:
        """Get detailed help text for the command."""
        parts = [
            f"**/{self.name}** - {self.description}",
        ]

        if self.usage:
            parts.append(f"\n**Usage:** `/{self.name} {self.usage}`")

        if self.aliases:
            parts.append(f"\n**Aliases:** {', '.join(self.aliases)}")

        if self.examples:
            parts.append("\n**Examples:**")
            for example in self.examples:
                parts.append(f"- `{example}`")

        return "\n".join(parts)

    def validate_args(self, args: str) -> Optional[str]:
        """
        Validate command arguments.

        Args:
            args: Arguments string

        Returns:
            Error message if invalid, None if valid
        """
        return None

    def __repr__(self) -> str:
        return f"<SlashCommand /{self.name}>"


class AsyncSlashCommand(SlashCommand):
    """Base class for commands whose work is a coroutine."""

    def run(self, args: str, context: CommandContext) -> CommandResult:
        """Run the coroutine to completion."""
        return asyncio.run(self.run_async(args, context))

    @abstractmethod
    async def run_async(self, args: str, context: CommandContext) -> CommandResult:
        """Execute the command asynchronously."""
        pass


def resolve_action(args: str, context: CommandContext) -> Action:
    """
    Look up the action named by a command's arguments.

    Args:
        args: Action id or name
        context: Command context

    Returns:
        The action, as last seen in the execution log

    Raises:
        CommandError: If no argument is given or the action is unknown
    """
    query = args.strip()
    if not query:
        raise CommandError("Specify an action name or id. Use /actions to list them.")

    action = context.engine.find_action(query)
    if action is None:
        raise CommandError(f"No executions recorded for action '{query}'.")
    return action
