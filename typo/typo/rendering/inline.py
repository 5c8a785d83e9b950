"""Inline markdown tokenizer.

Splits one block's text into formatted runs. Supported syntax is a small
fixed subset:
- `code` spans
- **bold** / __bold__
- *italic* / _italic_
- [text](url) links

Everything else is plain text. The tokenizer never fails: a special
character that does not open a recognised span is emitted as plain text.
"""

import re
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Plain:
    """Unformatted text."""
    text: str


@dataclass(frozen=True)
class Bold:
    """Bold text with its ** or __ delimiters removed."""
    text: str


@dataclass(frozen=True)
class Italic:
    """Italic text with its * or _ delimiters removed."""
    text: str


@dataclass(frozen=True)
class Code:
    """Inline code span with its backticks removed."""
    text: str


@dataclass(frozen=True)
class Link:
    """A [text](url) link."""
    text: str
    url: str


InlineToken = Union[Plain, Bold, Italic, Code, Link]


SPECIAL_CHARS = frozenset("`*_[")

# Tried in order at the current position; first match wins.
_SPAN_PATTERNS = [
    (re.compile(r'`([^`]+)`'), Code),
    (re.compile(r'\*\*(.+?)\*\*'), Bold),
    (re.compile(r'__(.+?)__'), Bold),
    (re.compile(r'\*([^*]+?)\*'), Italic),
    (re.compile(r'_([^_]+?)_'), Italic),
]

_LINK_PATTERN = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')


def tokenize_inline(text: str) -> list[InlineToken]:
    """Tokenize inline markdown into formatted runs.

    Args:
        text: Text of a single block (no newlines expected, but tolerated)

    Returns:
        Ordered tokens covering the whole input

    Examples:
        >>> tokenize_inline("Some **bold** text.")
        [Plain(text='Some '), Bold(text='bold'), Plain(text=' text.')]

        >>> tokenize_inline("a * b")
        [Plain(text='a '), Plain(text='* b')]
    """
    tokens: list[InlineToken] = []
    pos = 0
    length = len(text)

    while pos < length:
        matched = False

        for pattern, token_cls in _SPAN_PATTERNS:
            match = pattern.match(text, pos)
            if match:
                tokens.append(token_cls(match.group(1)))
                pos = match.end()
                matched = True
                break

        if matched:
            continue

        match = _LINK_PATTERN.match(text, pos)
        if match:
            tokens.append(Link(text=match.group(1), url=match.group(2)))
            pos = match.end()
            continue

        # Plain run: the first character is always taken so an unmatched
        # special character still makes progress.
        end = pos + 1
        while end < length and text[end] not in SPECIAL_CHARS:
            end += 1

        tokens.append(Plain(text[pos:end]))
        pos = end

    return tokens


def token_text(token: InlineToken) -> str:
    """Return the visible text of an inline token."""
    return token.text


def source_text(token: InlineToken) -> str:
    """Rebuild the markdown source a token was parsed from.

    Bold spans are always rebuilt with ``**`` and italic spans with ``*``,
    so this is exact only for input that used those delimiters.
    """
    if isinstance(token, Code):
        return f"`{token.text}`"
    if isinstance(token, Bold):
        return f"**{token.text}**"
    if isinstance(token, Italic):
        return f"*{token.text}*"
    if isinstance(token, Link):
        return f"[{token.text}]({token.url})"
    return token.text


def plain_text(tokens: list[InlineToken]) -> str:
    """Join the visible text of tokens, dropping all formatting."""
    return "".join(token_text(token) for token in tokens)
