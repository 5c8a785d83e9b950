"""Help command for typo."""
from ..base import CommandContext, CommandResult, SlashCommand


class HelpCommand(SlashCommand):
    """Display help information."""

    name = "help"
    description = "Show available slash commands"
    aliases = ["h", "?"]
    usage = "[command]"
    examples = ["/help", "/help stats"]

    def run(self, args: str, context: CommandContext) -> CommandResult:
        """Execute help command."""
        registry = context.registry
        if registry is None:
            return CommandResult.error("No command registry available.")

        if args.strip():
            command_name = args.strip().lstrip("/")
            help_text = registry.get_help(command_name)

            if help_text:
                return CommandResult.success(help_text)
            return CommandResult.error(f"Unknown command: {command_name}")

        lines = ["## Available commands"]
        for cmd in registry.list_commands():
            usage = f" {cmd['usage']}" if cmd['usage'] else ""
            lines.append(f"- `/{cmd['name']}{usage}` - {cmd['description']}")

        lines.append("")
        lines.append("Anything that is not a command is rendered as markdown.")

        return CommandResult.success("\n".join(lines))
