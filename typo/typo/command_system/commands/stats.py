"""Stats command for typo."""
from ..base import CommandContext, CommandResult, SlashCommand, resolve_action
from ...utils import format_duration_ms, format_percent


class StatsCommand(SlashCommand):
    """Show execution stats for an action."""

    name = "stats"
    description = "Show run count, success rate and timing for an action"
    aliases = ["st"]
    usage = "<action name or id>"
    examples = ["/stats Fix Grammar", "/stats fix-grammar"]

    def validate_args(self, args: str):
        if not args.strip():
            return f"Usage: /{self.name} {self.usage}"
        return None

    def run(self, args: str, context: CommandContext) -> CommandResult:
        """Execute stats command."""
        action = resolve_action(args, context)
        stats = context.engine.compute_stats(action.id)

        if stats is None:
            return CommandResult.success(f"No executions recorded for **{action.name}**.")

        lines = [
            f"## {action.name}",
            f"- Runs: {stats.total_runs}",
            f"- Successful: {stats.successful_runs}",
            f"- Failed: {stats.failed_runs}",
            f"- Success rate: {format_percent(stats.success_rate)}",
            f"- Average duration: {format_duration_ms(stats.average_duration_ms)}",
        ]

        if stats.top_failure_reasons:
            lines.append("")
            lines.append("### Top failure reasons")
            for index, reason in enumerate(stats.top_failure_reasons, start=1):
                lines.append(f"{index}. {reason}")

        return CommandResult.success("\n".join(lines), data=stats)
