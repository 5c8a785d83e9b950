"""Actions command for typo."""
from ..base import CommandContext, CommandResult, SlashCommand


class ActionsCommand(SlashCommand):
    """List the actions found in the execution log."""

    name = "actions"
    description = "List logged actions with their run counts"
    aliases = ["ls"]

    def run(self, args: str, context: CommandContext) -> CommandResult:
        """Execute actions command."""
        actions = context.engine.known_actions()
        if not actions:
            return CommandResult.success("No actions have been recorded yet.")

        lines = ["## Actions"]
        for action in actions:
            runs = len(context.store.entries_for(action.id))
            noun = "run" if runs == 1 else "runs"
            lines.append(f"- **{action.name}** (`{action.id}`): {runs} {noun}")

        return CommandResult.success("\n".join(lines), data=actions)
