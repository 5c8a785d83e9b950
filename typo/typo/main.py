"""
Main entry point for typo.
"""
import argparse
import asyncio
import logging
import sys
import threading
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from .constants import APP_NAME, APP_VERSION, APP_DESCRIPTION

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=APP_DESCRIPTION
    )

    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"{APP_NAME} {APP_VERSION}"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to config file"
    )

    parser.add_argument(
        "--log-file",
        type=str,
        help="Path to the execution log (JSON)"
    )

    parser.add_argument(
        "-t", "--theme",
        type=str,
        help="Color theme (default, light, or a custom theme name)"
    )

    parser.add_argument(
        "--no-update-check",
        action="store_true",
        help="Skip automatic update check on startup"
    )

    parser.add_argument(
        "-c", "--command",
        type=str,
        help="Execute a single slash command and exit"
    )

    parser.add_argument(
        "-r", "--render",
        type=str,
        metavar="FILE",
        help="Render a markdown file ('-' for stdin) and exit"
    )

    return parser.parse_args(argv)


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger to write through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def run_update_check_sync(notifier, releases_url: str) -> None:
    """
    Run the update check on a background thread.

    Args:
        notifier: UpdateNotifier that receives an available update
        releases_url: GitHub API URL of the latest release
    """
    from .update_checker import UpdateChecker

    async def _check():
        checker = UpdateChecker(releases_url=releases_url)
        result = await checker.check_for_update(APP_VERSION)

        if result.update_available:
            notifier.queue_notification(result)

    try:
        asyncio.run(_check())
    except Exception:
        logger.debug("Background update check failed", exc_info=True)


def read_markdown(source: str) -> str:
    """Read markdown from a file path, or stdin for '-'."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).expanduser().read_text(encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    from .cli import TypoCLI, build_context
    from .config import ConfigManager

    config = ConfigManager(Path(args.config).expanduser() if args.config else None)
    context = build_context(config, theme=args.theme, log_file=args.log_file)

    if args.render:
        try:
            text = read_markdown(args.render)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Cannot read {args.render}: {e}")
            return 1
        context.renderer.print(text, context.console)
        return 0

    cli = TypoCLI(context)

    if args.command:
        result = cli.handle_input(args.command)
        if result is None:
            return 0
        return 0 if result.is_success else 1

    from .update_notifier import UpdateNotifier
    notifier = UpdateNotifier(console=context.console)

    update_thread = None
    if not args.no_update_check and config.update.check_on_startup:
        update_thread = threading.Thread(
            target=run_update_check_sync,
            args=(notifier, config.update.releases_url),
            daemon=True
        )
        update_thread.start()

    try:
        cli.run()

        if update_thread is not None and update_thread.is_alive():
            update_thread.join(timeout=0.5)

        notifier.show_pending_notification()

        return 0
    except KeyboardInterrupt:
        context.console.print("\nGoodbye!")
        return 0
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
