"""Suggest command for typo."""
from ..base import CommandContext, CommandResult, SlashCommand, resolve_action


class SuggestCommand(SlashCommand):
    """Suggest a prompt improvement for an action."""

    name = "suggest"
    description = "Suggest a better prompt for an action based on its runs"
    aliases = ["sg"]
    usage = "<action name or id>"
    examples = ["/suggest Shorten Text"]

    def validate_args(self, args: str):
        if not args.strip():
            return f"Usage: /{self.name} {self.usage}"
        return None

    def run(self, args: str, context: CommandContext) -> CommandResult:
        """Execute suggest command."""
        action = resolve_action(args, context)
        suggestion = context.engine.suggestion(action)

        if suggestion is None:
            return CommandResult.success(
                f"No suggestion for **{action.name}**. Its runs look healthy "
                "or there are not enough of them yet."
            )

        lines = [f"## {action.name}", suggestion.summary]
        if suggestion.suggested_prompt:
            lines.extend(["", "```text", suggestion.suggested_prompt, "```"])

        return CommandResult.success("\n".join(lines), data=suggestion)
