"""Logs command for typo."""
from ..base import CommandContext, CommandResult, SlashCommand
from ...exceptions import CommandError
from ...utils import format_duration_ms, format_timestamp, truncate_string

DEFAULT_COUNT = 10


class LogsCommand(SlashCommand):
    """Show the most recent execution log entries."""

    name = "logs"
    description = "Show the most recent action executions"
    aliases = ["log", "history"]
    usage = "[count]"
    examples = ["/logs", "/logs 25"]

    def run(self, args: str, context: CommandContext) -> CommandResult:
        """Execute logs command."""
        count = self._parse_count(args)
        entries = context.store.recent(count)

        if not entries:
            return CommandResult.success("The execution log is empty.")

        lines = [f"## Last {len(entries)} of {len(context.store)} executions"]
        for entry in entries:
            status = "ok" if entry.success else "failed"
            model = f" `{entry.model_id}`" if entry.model_id else ""
            line = (
                f"- {format_timestamp(entry.timestamp)} **{entry.action_name}**{model} "
                f"{status} in {format_duration_ms(entry.duration_ms)}"
            )
            if not entry.success and entry.error_message:
                line += f": *{truncate_string(entry.error_message, 80)}*"
            lines.append(line)

        return CommandResult.success("\n".join(lines), data=entries)

    def _parse_count(self, args: str) -> int:
        text = args.strip()
        if not text:
            return DEFAULT_COUNT
        try:
            count = int(text)
        except ValueError:
            raise CommandError(f"Count must be a number, got '{text}'")
        if count < 1:
            raise CommandError("Count must be at least 1")
        return count
