"""
Tests for slash commands, the command registry and the input parser.
"""

from io import StringIO

import allure
import httpx
import pytest
from rich.console import Console

from typo.cli import TypoCLI
from typo.command_system import CommandContext, CommandParser, CommandRegistry
from typo.command_system.commands.update import UpdateCommand
from typo.insights import Action, ExecutionLogEntry, ExecutionLogStore, ExecutionStatsEngine
from typo.rendering import MarkdownRenderer
from typo.update_checker import UpdateChecker


ACTION = Action(id="shorten-text", name="Shorten Text", prompt="Shorten the following text:")


def make_entry(index: int, success: bool = True, error_message: str = None) -> ExecutionLogEntry:
    return ExecutionLogEntry(
        id=f"entry-{index}",
        timestamp=1_700_000_000.0 + index,
        action_id=ACTION.id,
        action_name=ACTION.name,
        prompt=ACTION.prompt,
        model_id="gpt-4o-mini",
        duration_ms=1500.0,
        success=success,
        error_message=error_message,
    )


@pytest.fixture
def context() -> CommandContext:
    store = ExecutionLogStore()
    for i in range(7):
        store.append(make_entry(i))
    for i in range(7, 10):
        store.append(make_entry(i, success=False, error_message="Request timeout"))

    return CommandContext(
        store=store,
        engine=ExecutionStatsEngine(store),
        renderer=MarkdownRenderer(),
        console=Console(file=StringIO(), width=100, color_system=None),
        registry=CommandRegistry(),
    )


def run(context: CommandContext, line: str):
    parsed = CommandParser().parse(line)
    return context.registry.execute(parsed.command, parsed.args, context)


@allure.feature("Slash Commands")
@allure.story("Discovery")
@allure.severity(allure.severity_level.CRITICAL)
def test_builtin_commands_are_discovered():
    """Every built-in command is registered, aliases included."""
    registry = CommandRegistry()

    for name in ("stats", "suggest", "logs", "actions", "render", "update", "help", "quit"):
        assert registry.has_command(name)
    assert registry.get("exit").name == "quit"
    assert "/" not in "".join(registry.list_command_names())


@allure.feature("Slash Commands")
@allure.story("/stats")
@allure.severity(allure.severity_level.CRITICAL)
def test_stats_command(context):
    """Stats are reported for an action looked up by name."""
    result = run(context, "/stats shorten text")

    assert result.is_success
    assert "- Runs: 10" in result.message
    assert "- Failed: 3" in result.message
    assert "- Success rate: 70%" in result.message
    assert "1. The request timed out." in result.message
    assert result.data.total_runs == 10


@allure.feature("Slash Commands")
@allure.story("/stats")
@allure.severity(allure.severity_level.NORMAL)
@pytest.mark.parametrize("line,error", [
    ("/stats", "Usage: /stats"),
    ("/stats Nope", "No executions recorded for action 'Nope'."),
])
def test_stats_command_errors(context, line, error):
    """Missing or unknown actions are reported as errors."""
    result = run(context, line)

    assert result.is_error
    assert error in result.message


@allure.feature("Slash Commands")
@allure.story("/suggest")
@allure.severity(allure.severity_level.NORMAL)
def test_suggest_command_without_suggestion(context):
    """A 70% success rate with fast runs gives no suggestion."""
    result = run(context, "/suggest shorten-text")

    assert result.is_success
    assert result.message.startswith("No suggestion for **Shorten Text**")


@allure.feature("Slash Commands")
@allure.story("/suggest")
@allure.severity(allure.severity_level.NORMAL)
def test_suggest_command_with_suggestion(context):
    """A failing action gets a suggested prompt in a code fence."""
    for i in range(10, 14):
        context.store.append(make_entry(i, success=False, error_message="Invalid API key"))

    result = run(context, "/suggest Shorten Text")

    assert result.is_success
    assert "Success rate is 50% across 14 runs." in result.message
    assert "```text\nShorten the following text:" in result.message
    assert result.data.suggested_prompt.startswith(ACTION.prompt)


@allure.feature("Slash Commands")
@allure.story("/logs")
@allure.severity(allure.severity_level.NORMAL)
def test_logs_command(context):
    """The newest entries are listed first."""
    result = run(context, "/logs 2")

    assert result.is_success
    assert result.message.startswith("## Last 2 of 10 executions")
    assert [e.id for e in result.data] == ["entry-9", "entry-8"]
    assert "*Request timeout*" in result.message


@allure.feature("Slash Commands")
@allure.story("/logs")
@allure.severity(allure.severity_level.NORMAL)
@pytest.mark.parametrize("args", ["abc", "0", "-3"])
def test_logs_command_rejects_bad_counts(context, args):
    """Counts must be positive integers."""
    assert run(context, f"/logs {args}").is_error


@allure.feature("Slash Commands")
@allure.story("/logs")
@allure.severity(allure.severity_level.MINOR)
def test_logs_command_on_empty_log(context):
    """An empty log is reported as such."""
    context.store.clear()

    assert run(context, "/logs").message == "The execution log is empty."


@allure.feature("Slash Commands")
@allure.story("/actions")
@allure.severity(allure.severity_level.NORMAL)
def test_actions_command(context):
    """Logged actions are listed with run counts."""
    result = run(context, "/actions")

    assert "- **Shorten Text** (`shorten-text`): 10 runs" in result.message


@allure.feature("Slash Commands")
@allure.story("/render")
@allure.severity(allure.severity_level.NORMAL)
def test_render_command(context, tmp_path):
    """A markdown file is rendered to the console."""
    path = tmp_path / "notes.md"
    path.write_text("# Heading\n\n- item with `code`", encoding="utf-8")

    result = run(context, f"/render {path}")
    output = context.console.file.getvalue()

    assert result.is_success
    assert "Heading" in output
    assert "• item with  code" in output


@allure.feature("Slash Commands")
@allure.story("/render")
@allure.severity(allure.severity_level.NORMAL)
def test_render_command_missing_file(context, tmp_path):
    """A missing file is an error result."""
    result = run(context, f"/render {tmp_path / 'missing.md'}")

    assert result.is_error
    assert "File not found" in result.message


@allure.feature("Slash Commands")
@allure.story("/help and /quit")
@allure.severity(allure.severity_level.NORMAL)
def test_help_and_quit(context):
    """Help lists commands; quit asks the session to exit."""
    overview = run(context, "/help")
    detail = run(context, "/help /stats")
    quit_result = run(context, "/q")

    assert "`/stats <action name or id>`" in overview.message
    assert detail.message.startswith("**/stats**")
    assert run(context, "/help nothing").is_error
    assert quit_result.should_exit


@allure.feature("Slash Commands")
@allure.story("Unknown commands")
@allure.severity(allure.severity_level.NORMAL)
def test_unknown_command(context):
    """Unknown commands point at /help."""
    result = run(context, "/frobnicate")

    assert result.is_error
    assert "Type /help" in result.message


@allure.feature("Slash Commands")
@allure.story("/update")
@allure.severity(allure.severity_level.NORMAL)
def test_update_command_reports_new_release(context):
    """A newer release is reported with its download link."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={
            "tag_name": "v9.0.0",
            "html_url": "https://github.com/example/typo/releases/tag/v9.0.0",
            "assets": [],
        })

    checker = UpdateChecker(releases_url="https://api.example.com/latest",
                            transport=httpx.MockTransport(handler))
    context.registry.register(UpdateCommand(checker))

    result = run(context, "/update")

    assert result.is_success
    assert "**9.0.0**" in result.message
    assert "releases/tag/v9.0.0" in result.message


@allure.feature("Slash Commands")
@allure.story("/update")
@allure.severity(allure.severity_level.NORMAL)
def test_update_command_reports_failure(context):
    """Check failures become error results."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    checker = UpdateChecker(transport=httpx.MockTransport(handler))
    context.registry.register(UpdateCommand(checker))

    result = run(context, "/update")

    assert result.is_error
    assert "HTTP 500" in result.message


@allure.feature("Input Parsing")
@allure.story("Commands and markdown")
@allure.severity(allure.severity_level.NORMAL)
@pytest.mark.parametrize("line,kind,command,args", [
    ("/stats Fix Grammar", "command", "stats", "Fix Grammar"),
    ("  /LOGS 5 ", "command", "logs", "5"),
    ("# Heading", "markdown", "", ""),
    ("// not a command", "markdown", "", ""),
    ("   ", "empty", "", ""),
])
def test_parser(line, kind, command, args):
    """Slash lines are commands; anything else is markdown."""
    parsed = CommandParser().parse(line)

    assert (parsed.type, parsed.command, parsed.args) == (kind, command, args)


@allure.feature("Interactive Session")
@allure.story("Input handling")
@allure.severity(allure.severity_level.NORMAL)
def test_cli_renders_markdown_and_errors(context):
    """Markdown input is previewed; command errors are printed."""
    cli = TypoCLI(context)

    assert cli.handle_input("Some **bold** text.") is None
    result = cli.handle_input("/stats Nope")
    output = context.console.file.getvalue()

    assert "Some bold text." in output
    assert result.is_error
    assert "Error: No executions recorded" in output
