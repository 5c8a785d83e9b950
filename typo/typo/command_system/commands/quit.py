"""Quit command for typo."""
from ..base import CommandContext, CommandResult, SlashCommand


class QuitCommand(SlashCommand):
    """Exit the CLI."""

    name = "quit"
    description = "Exit the CLI"
    aliases = ["exit", "q", "bye"]

    def run(self, args: str, context: CommandContext) -> CommandResult:
        """Execute quit command."""
        return CommandResult.exit("Goodbye!")
