"""
Markdown renderer for typo.
Parses model output into blocks and turns them into Rich renderables, with
fenced code blocks passed through the line highlighter.
"""
import logging
from typing import Optional
from urllib.parse import urlparse

from rich import box
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from .blocks import Block, BulletItem, CodeBlock, Heading, NumberedItem, Paragraph, parse_blocks
from .highlighter import SyntaxToken, TokenType, highlight_code
from .inline import Bold, Code, InlineToken, Italic, Link, tokenize_inline
from .theme import Theme

BULLET = "•"
NUMBER_MARKER_WIDTH = 3

logger = logging.getLogger(__name__)


class MarkdownRenderer:
    """
    Renders the supported markdown subset to the terminal.

    Parsing is pure: ``render`` and ``inline`` return plain data and never
    raise. The ``to_*`` and ``print`` methods map that data onto Rich
    objects using the active theme.
    """

    def __init__(
        self,
        theme: Optional[Theme] = None,
        syntax_highlighting: bool = True,
        line_numbers: bool = True,
    ) -> None:
        """
        Initialize the renderer.

        Args:
            theme: Theme used for styling, defaults to the built-in theme
            syntax_highlighting: Whether code blocks are highlighted
            line_numbers: Whether code blocks show a line-number gutter
        """
        self._theme = theme or Theme()
        self._syntax_highlighting = syntax_highlighting
        self._line_numbers = line_numbers

    @property
    def theme(self) -> Theme:
        """Get the active theme."""
        return self._theme

    def render(self, text: str) -> list[Block]:
        """Parse markdown text into blocks."""
        return parse_blocks(text)

    def inline(self, text: str) -> list[InlineToken]:
        """Tokenize inline formatting of one block's text."""
        return tokenize_inline(text)

    def inline_text(self, text: str, base_style: str = "") -> Text:
        """
        Build a styled Text from inline markdown.

        Args:
            text: Block text with inline formatting
            base_style: Style for plain runs, defaults to the paragraph style

        Returns:
            Rich Text with one span per inline token
        """
        styles = self._theme.markdown
        base = base_style or styles.text
        result = Text()

        for token in tokenize_inline(text):
            if isinstance(token, Bold):
                result.append(token.text, style=f"{base} {styles.bold}")
            elif isinstance(token, Italic):
                result.append(token.text, style=f"{base} {styles.italic}")
            elif isinstance(token, Code):
                result.append(f" {token.text} ", style=styles.code)
            elif isinstance(token, Link):
                if urlparse(token.url).scheme:
                    style = Style.parse(styles.link) + Style(link=token.url)
                else:
                    style = Style.parse(styles.link)
                result.append(token.text, style=style)
            else:
                result.append(token.text, style=base)

        return result

    def code_text(self, code: str, language: str = "") -> Text:
        """
        Build highlighted, optionally line-numbered Text for a code block.

        Args:
            code: Raw code block contents
            language: Fence language tag

        Returns:
            Rich Text with one line per source line
        """
        syntax = self._theme.syntax
        lines = code.split("\n")
        gutter_width = len(str(len(lines)))
        result = Text(no_wrap=True)

        if self._syntax_highlighting:
            highlighted = highlight_code(code, language)
        else:
            highlighted = [[SyntaxToken(line or " ", TokenType.PLAIN)] for line in lines]

        for number, tokens in enumerate(highlighted, start=1):
            if number > 1:
                result.append("\n")
            if self._line_numbers:
                result.append(f"{number:>{gutter_width}} ", style=syntax.gutter)
                result.append("│ ", style=syntax.gutter)
            for token in tokens:
                result.append(token.text, style=self._theme.style_for(token.type))

        return result

    def block_renderable(self, block: Block) -> RenderableType:
        """Convert one block to a Rich renderable."""
        styles = self._theme.markdown

        if isinstance(block, CodeBlock):
            title = block.language.lower() if block.language else "code"
            return Panel(
                self.code_text(block.raw_code, block.language),
                title=Text(title, style=styles.code_title),
                title_align="left",
                box=box.ROUNDED,
                border_style=styles.code_border,
                padding=(0, 1),
            )

        if isinstance(block, Heading):
            style = getattr(styles, f"heading{block.level}")
            return self.inline_text(block.text, base_style=style)

        if isinstance(block, BulletItem):
            line = Text(f"{BULLET} ", style=styles.bullet)
            line.append_text(self.inline_text(block.text))
            return line

        if isinstance(block, NumberedItem):
            line = Text(f"{block.marker:>{NUMBER_MARKER_WIDTH}} ", style=styles.marker)
            line.append_text(self.inline_text(block.text))
            return line

        return self.inline_text(block.text)

    def to_renderables(self, blocks: list[Block]) -> list[RenderableType]:
        """
        Convert blocks to renderables, separating blocks with blank lines.

        Consecutive items of the same list kind are kept together.
        """
        renderables: list[RenderableType] = []
        previous: Optional[Block] = None

        for block in blocks:
            if previous is not None and not _same_list(previous, block):
                renderables.append(Text(""))
            renderables.append(self.block_renderable(block))
            previous = block

        return renderables

    def to_group(self, text: str) -> Group:
        """Parse and convert markdown text into a single renderable group."""
        blocks = self.render(text)
        logger.debug(f"Rendering blocks: {describe_blocks(blocks)}")
        return Group(*self.to_renderables(blocks))

    def print(self, text: str, console: Console) -> None:
        """Render markdown text straight to a console."""
        console.print(self.to_group(text))


def _same_list(previous: Block, current: Block) -> bool:
    list_kinds = (BulletItem, NumberedItem)
    return (
        isinstance(previous, list_kinds)
        and type(previous) is type(current)
    )


def describe_blocks(blocks: list[Block]) -> list[str]:
    """Summarize blocks as short labels, e.g. for debug logging."""
    labels = []
    for block in blocks:
        if isinstance(block, Heading):
            labels.append(f"h{block.level}")
        elif isinstance(block, CodeBlock):
            labels.append(f"code:{block.language or 'plain'}")
        elif isinstance(block, BulletItem):
            labels.append("bullet")
        elif isinstance(block, NumberedItem):
            labels.append(f"item:{block.marker}")
        elif isinstance(block, Paragraph):
            labels.append("p")
    return labels

