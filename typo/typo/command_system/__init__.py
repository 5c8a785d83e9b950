"""Command system for typo."""
from .base import AsyncSlashCommand, CommandContext, CommandResult, CommandStatus, SlashCommand
from .parser import CommandParser, ParsedInput
from .registry import CommandRegistry

__all__ = [
    'SlashCommand', 'AsyncSlashCommand', 'CommandResult', 'CommandStatus', 'CommandContext',
    'CommandParser', 'ParsedInput',
    'CommandRegistry',
]
