"""Markdown and code rendering for typo."""
from .blocks import Block, BulletItem, CodeBlock, Heading, NumberedItem, Paragraph, parse_blocks
from .inline import Bold, Code, InlineToken, Italic, Link, Plain, tokenize_inline
from .languages import Language, resolve_language
from .highlighter import SyntaxToken, TokenType, highlight_code, highlight_line
from .theme import Theme, ThemeManager
from .renderer import MarkdownRenderer

__all__ = [
    # Blocks
    'Block', 'Heading', 'BulletItem', 'NumberedItem', 'Paragraph', 'CodeBlock',
    'parse_blocks',
    # Inline
    'InlineToken', 'Plain', 'Bold', 'Italic', 'Code', 'Link', 'tokenize_inline',
    # Highlighting
    'Language', 'resolve_language',
    'SyntaxToken', 'TokenType', 'highlight_line', 'highlight_code',
    # Output
    'Theme', 'ThemeManager', 'MarkdownRenderer',
]
