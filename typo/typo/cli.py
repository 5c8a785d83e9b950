"""
Interactive session for typo.
Reads slash commands and markdown from a prompt and renders the results.
"""
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style
from rich.console import Console
from rich.text import Text

from .command_system import CommandContext, CommandParser, CommandRegistry, CommandResult
from .config import ConfigManager
from .constants import APP_NAME, APP_VERSION, THEMES_DIR
from .insights import ExecutionLogStore, ExecutionStatsEngine, JsonFileLogPersistence
from .rendering import MarkdownRenderer, ThemeManager

logger = logging.getLogger(__name__)


PROMPT_STYLE = Style.from_dict({
    'prompt': '#00d7d7',
    'completion-menu.completion': 'bg:#262626 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000 bold',
    'completion-menu.meta.completion': 'bg:#262626 #666666',
    'completion-menu.meta.completion.current': 'bg:#00aaaa #000000',
})


class SlashCommandCompleter(Completer):
    """Completes slash command names, showing their descriptions."""

    def __init__(self) -> None:
        self._commands: List[tuple] = []

    def set_commands(self, commands: List[dict]) -> None:
        """Set available slash commands."""
        self._commands = [
            (cmd['name'], cmd['description'][:50])
            for cmd in commands
        ]

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        """Get completions for the text before the cursor."""
        text = document.text_before_cursor
        if not text.startswith('/') or ' ' in text:
            return

        query = text[1:].lower()
        for name, desc in self._commands:
            if name.lower().startswith(query):
                yield Completion(
                    f'/{name}',
                    start_position=-len(text),
                    display=f'/{name}',
                    display_meta=desc
                )


def build_context(
    config: ConfigManager,
    console: Optional[Console] = None,
    registry: Optional[CommandRegistry] = None,
    theme: Optional[str] = None,
    log_file: Optional[str] = None,
) -> CommandContext:
    """
    Wire the log store, stats engine and renderer from configuration.

    Args:
        config: Loaded configuration
        console: Console to print to, created with the configured theme when None
        registry: Command registry, discovered when None
        theme: Theme name overriding the configured one
        log_file: Execution log path overriding the configured one

    Returns:
        A command context ready for use
    """
    insights = config.insights
    render = config.render

    themes = ThemeManager(THEMES_DIR)
    themes.set_theme(theme or render.theme)

    store = ExecutionLogStore(
        JsonFileLogPersistence(Path(log_file or insights.log_file).expanduser()),
        max_entries=insights.max_entries,
    )
    engine = ExecutionStatsEngine(
        store,
        min_runs=insights.min_runs,
        low_success_rate=insights.low_success_rate,
        slow_average_ms=insights.slow_average_ms,
    )
    renderer = MarkdownRenderer(
        theme=themes.current_theme,
        syntax_highlighting=render.syntax_highlighting,
        line_numbers=render.line_numbers,
    )

    if console is None:
        console = Console(theme=themes.get_rich_theme())

    return CommandContext(
        store=store,
        engine=engine,
        renderer=renderer,
        console=console,
        config=config,
        registry=registry or CommandRegistry(),
    )


class TypoCLI:
    """
    Interactive command loop.

    Lines starting with ``/`` run slash commands; anything else is
    rendered as markdown so it can be previewed.
    """

    def __init__(self, context: CommandContext) -> None:
        """
        Initialize the CLI.

        Args:
            context: Collaborators shared with every command
        """
        self._context = context
        self._registry = context.registry or CommandRegistry()
        self._context.registry = self._registry
        self._parser = CommandParser()
        self._completer = SlashCommandCompleter()
        self._completer.set_commands(self._registry.list_commands())
        self._session: Optional[PromptSession] = None
        self._running = False

    @property
    def console(self) -> Console:
        """Get the output console."""
        return self._context.console

    def _create_session(self) -> PromptSession:
        """Create a new prompt session."""
        return PromptSession(
            completer=self._completer,
            complete_while_typing=True,
            history=InMemoryHistory(),
            style=PROMPT_STYLE,
            mouse_support=False,
        )

    def print_welcome(self) -> None:
        """Print the banner shown when the session starts."""
        self.console.print(f"[ui.title]{APP_NAME}[/ui.title] [ui.muted]v{APP_VERSION}[/ui.muted]")
        self.console.print("[ui.muted]Type /help for commands. Anything else is rendered as markdown.[/ui.muted]")
        self.console.print()

    def run(self) -> None:
        """Run the CLI main loop until /quit or end of input."""
        self._running = True
        self.print_welcome()

        if self._session is None:
            self._session = self._create_session()

        while self._running:
            try:
                user_input = self._session.prompt([('class:prompt', '> ')])
            except KeyboardInterrupt:
                self.console.print("[ui.muted]Use /quit to exit[/ui.muted]")
                continue
            except EOFError:
                self._running = False
                break

            self.handle_input(user_input)

    def handle_input(self, user_input: str) -> Optional[CommandResult]:
        """
        Process one line of input.

        Args:
            user_input: Raw input

        Returns:
            The command result, or None for markdown and empty input
        """
        parsed = self._parser.parse(user_input)
        logger.debug(f"Parsed input as {parsed.type}")

        if parsed.type == "command":
            result = self._registry.execute(parsed.command, parsed.args, self._context)
            self.show_result(result)
            if result.should_exit:
                self._running = False
            return result

        if parsed.type == "markdown":
            self._context.renderer.print(parsed.raw, self.console)
        return None

    def show_result(self, result: CommandResult) -> None:
        """Print a command result."""
        if not result.message:
            return
        if result.is_error:
            self.console.print(Text.assemble(("Error: ", "ui.error"), result.message))
        else:
            self._context.renderer.print(result.message, self.console)
