"""Render command for typo."""
from pathlib import Path

from ..base import CommandContext, CommandResult, SlashCommand
from ...exceptions import CommandError


class RenderCommand(SlashCommand):
    """Render a markdown file in the terminal."""

    name = "render"
    description = "Render a markdown file"
    aliases = ["r", "cat"]
    usage = "<file>"
    examples = ["/render README.md"]

    def validate_args(self, args: str):
        if not args.strip():
            return f"Usage: /{self.name} {self.usage}"
        return None

    def run(self, args: str, context: CommandContext) -> CommandResult:
        """Execute render command."""
        path = Path(args.strip()).expanduser()
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise CommandError(f"File not found: {path}")
        except (OSError, UnicodeDecodeError) as e:
            raise CommandError(f"Cannot read {path}: {e}")

        context.renderer.print(text, context.console)
        return CommandResult.success(data=context.renderer.render(text))
