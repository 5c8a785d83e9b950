"""Heuristic line-oriented syntax highlighter.

Splits a line of code into classified spans using a fixed, ordered list
of anchored patterns. This is not a parser: strings with unusual escapes,
nested block comments and multi-line constructs are classified on a
best-effort basis. Every character of the line ends up in exactly one
token, in order.
"""

import re
from dataclasses import dataclass
from enum import Enum

from .languages import Language, keywords_for, resolve_language, type_words_for


class TokenType(Enum):
    """Classification of a highlighted span."""
    KEYWORD = "keyword"
    STRING = "string"
    COMMENT = "comment"
    NUMBER = "number"
    TYPE = "type"
    FUNCTION = "function"
    PARAMETER = "parameter"
    PUNCTUATION = "punctuation"
    PLAIN = "plain"


@dataclass(frozen=True)
class SyntaxToken:
    """A classified span of source text."""
    text: str
    type: TokenType


# Order matters: the first pattern matching at the current position wins.
TOKEN_PATTERNS: list[tuple[re.Pattern, TokenType]] = [
    (re.compile(r'//.*$|#.*$'), TokenType.COMMENT),
    (re.compile(r'/\*.*?\*/'), TokenType.COMMENT),
    (re.compile(r'"(?:[^"\\]|\\.)*"'), TokenType.STRING),
    (re.compile(r"'(?:[^'\\]|\\.)*'"), TokenType.STRING),
    (re.compile(r'\b\d+\.?\d*\b'), TokenType.NUMBER),
    (re.compile(r'\b[A-Za-z_]\w*(?=\s*\()'), TokenType.FUNCTION),
    (re.compile(r'\b[A-Za-z_]\w*'), TokenType.PLAIN),
    (re.compile(r'[{}()\[\];:,.=+\-*/<>!&|?@%^~]'), TokenType.PUNCTUATION),
    (re.compile(r'\s+'), TokenType.PLAIN),
]

EMPTY_LINE_TOKEN = SyntaxToken(" ", TokenType.PLAIN)


def _classify_word(
    word: str,
    keywords: frozenset[str],
    type_words: frozenset[str],
) -> TokenType:
    if not word[0].isalpha():
        return TokenType.PLAIN
    if word in keywords:
        return TokenType.KEYWORD
    if word in type_words or (word[0].isupper() and len(word) > 1):
        return TokenType.TYPE
    return TokenType.PLAIN


def highlight_line(line: str, language: str = "") -> list[SyntaxToken]:
    """Split one line of code into classified tokens.

    Args:
        line: A single line of source code
        language: Fence language tag; case-insensitive, may be empty

    Returns:
        Tokens whose texts concatenate back to ``line``. An empty line
        yields a single plain space so it still occupies a visible row.

    Examples:
        >>> [(t.text, t.type.value) for t in highlight_line("let x = 1", "swift")]
        [('let', 'keyword'), (' ', 'plain'), ('x', 'plain'), (' ', 'plain'), ('=', 'punctuation'), (' ', 'plain'), ('1', 'number')]
    """
    if not line:
        return [EMPTY_LINE_TOKEN]

    resolved = resolve_language(language)
    return _tokenize(line, resolved)


def _tokenize(line: str, language: Language) -> list[SyntaxToken]:
    keywords = keywords_for(language)
    type_words = type_words_for(language)

    tokens: list[SyntaxToken] = []
    remaining = line

    while remaining:
        for pattern, default_type in TOKEN_PATTERNS:
            match = pattern.match(remaining)
            if not match or not match.group(0):
                continue

            text = match.group(0)
            token_type = default_type
            if default_type is TokenType.PLAIN:
                token_type = _classify_word(text, keywords, type_words)

            tokens.append(SyntaxToken(text, token_type))
            remaining = remaining[match.end():]
            break
        else:
            tokens.append(SyntaxToken(remaining[0], TokenType.PLAIN))
            remaining = remaining[1:]

    return tokens


def highlight_code(code: str, language: str = "") -> list[list[SyntaxToken]]:
    """Highlight every line of a code block.

    Args:
        code: Code block contents, lines separated by "\\n"
        language: Fence language tag

    Returns:
        One token list per line
    """
    resolved = resolve_language(language)
    return [
        _tokenize(line, resolved) if line else [EMPTY_LINE_TOKEN]
        for line in code.split("\n")
    ]
