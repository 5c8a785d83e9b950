"""Update command for typo."""
from ..base import AsyncSlashCommand, CommandContext, CommandResult
from ...constants import APP_VERSION, RELEASES_URL
from ...update_checker import UpdateChecker


class UpdateCommand(AsyncSlashCommand):
    """Check for a newer release."""

    name = "update"
    description = "Check for a newer release"
    aliases = ["upgrade"]

    def __init__(self, checker: UpdateChecker = None) -> None:
        """
        Initialize the update command.

        Args:
            checker: Update checker to use, built from config when None
        """
        super().__init__()
        self._checker = checker

    def _get_checker(self, context: CommandContext) -> UpdateChecker:
        if self._checker is not None:
            return self._checker
        url = context.config.update.releases_url if context.config else RELEASES_URL
        return UpdateChecker(releases_url=url)

    async def run_async(self, args: str, context: CommandContext) -> CommandResult:
        """Execute the update command."""
        context.console.print("[ui.muted]Checking for updates...[/ui.muted]")
        result = await self._get_checker(context).check_for_update(APP_VERSION)

        if result.error:
            return CommandResult.error(f"Failed to check for updates: {result.error}")

        if not result.update_available:
            return CommandResult.success(
                f"You're already on the latest version ({result.current_version})."
            )

        lines = [
            f"Update available: **{result.current_version}** -> **{result.latest_version}**",
        ]
        if result.download_url:
            lines.append(f"Download it from [the release page]({result.download_url}).")
        return CommandResult.success("\n\n".join(lines), data=result)
