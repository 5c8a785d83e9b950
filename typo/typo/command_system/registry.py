"""
Command registry for typo.
Handles command registration, discovery, and lookup.
"""
import importlib
import logging
import pkgutil
from typing import Dict, List, Optional

from ..exceptions import CommandError
from .base import CommandContext, CommandResult, SlashCommand

logger = logging.getLogger(__name__)


class CommandRegistry:
    """
    Registry for slash commands.

    Supports auto-discovery of commands from the commands package
    and dynamic registration of custom commands.
    """

    def __init__(self, discover: bool = True) -> None:
        """
        Initialize the registry.

        Args:
            discover: Whether to register the built-in commands
        """
        self._commands: Dict[str, SlashCommand] = {}
        self._aliases: Dict[str, str] = {}
        if discover:
            self._discover_commands()

    def _discover_commands(self) -> None:
        """Auto-discover and register commands from the commands package."""
        from . import commands as commands_package

        for module_info in pkgutil.iter_modules(commands_package.__path__):
            if module_info.name.startswith('_'):
                continue

            try:
                module = importlib.import_module(
                    f"{commands_package.__name__}.{module_info.name}"
                )
            except ImportError as e:
                logger.warning(f"Failed to load command module {module_info.name}: {e}")
                continue

            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type) and
                    issubclass(attr, SlashCommand) and
                    attr.__module__ == module.__name__ and
                    not getattr(attr, '__abstractmethods__', None) and
                    not attr_name.startswith('_')
                ):
                    self.register(attr())

        logger.debug(f"Registered {len(self._commands)} commands")

    def register(self, command: SlashCommand) -> None:
        """
        Register a command.

        Args:
            command: Command instance to register
        """
        self._commands[command.name] = command

        for alias in command.aliases:
            self._aliases[alias] = command.name

    def get(self, name: str) -> Optional[SlashCommand]:
        """
        Get a command by name or alias.

        Args:
            name: Command name or alias

        Returns:
            Command instance or None
        """
        name = name.lower()

        if name in self._commands:
            return self._commands[name]

        if name in self._aliases:
            return self._commands[self._aliases[name]]

        return None

    def execute(self, name: str, args: str, context: CommandContext) -> CommandResult:
        """
        Execute a command by name.

        Args:
            name: Command name
            args: Command arguments
            context: Collaborators for the command

        Returns:
            CommandResult from execution
        """
        command = self.get(name)

        if command is None:
            return CommandResult.error(
                f"Unknown command: /{name}. Type /help for available commands."
            )

        validation_error = command.validate_args(args)
        if validation_error:
            return CommandResult.error(validation_error)

        if context.registry is None:
            context.registry = self

        try:
            return command.run(args, context)
        except CommandError as e:
            return CommandResult.error(str(e))
        except Exception as e:
            logger.exception(f"Command /{command.name} failed")
            return CommandResult.error(f"Command error: {e}")

    def list_commands(self, include_hidden: bool = False) -> List[dict]:
        """
        List all registered commands.

        Args:
            include_hidden: Whether to include hidden commands

        Returns:
            List of command info dicts
        """
        commands = []
        for name, command in sorted(self._commands.items()):
            if command.hidden and not include_hidden:
                continue
            commands.append({
                "name": name,
                "description": command.description,
                "aliases": command.aliases,
                "usage": command.usage,
            })
        return commands

    def list_command_names(self) -> List[str]:
        """List all command names (including aliases)."""
        names = list(self._commands.keys())
        names.extend(self._aliases.keys())
        return sorted(set(names))

    def get_help(self, name: str) -> Optional[str]:
        """
        Get help text for a command.

        Args:
            name: Command name

        Returns:
            Help text or None
        """
        command = self.get(name)
        if command:
            return command.get_help()
        return None

    def has_command(self, name: str) -> bool:
        """Check if a command exists."""
        return name.lower() in self._commands or name.lower() in self._aliases
