"""
Property-based tests for the line syntax highlighter.
"""

import allure
import pytest
from hypothesis import given, settings, strategies as st

from typo.rendering.highlighter import (
    EMPTY_LINE_TOKEN,
    SyntaxToken,
    TokenType,
    highlight_code,
    highlight_line,
)
from typo.rendering.languages import Language, keywords_for, resolve_language


language_strategy = st.sampled_from(
    ["", "swift", "js", "TypeScript", "py", "html", "css", "json", "rs", "go",
     "kotlin", "bash", "cobol", "  Python  "]
)

code_like_strategy = st.text(
    alphabet=st.sampled_from(
        "abcXYZ_019 \t\"'\\/*#(){}[];:,.=+-<>!&|?@%^~$`"
    ),
    min_size=1,
    max_size=120,
)


def _types(tokens: list[SyntaxToken]) -> list[tuple[str, TokenType]]:
    return [(token.text, token.type) for token in tokens]


@allure.feature("Syntax Highlighting")
@allure.story("Round-trip: tokens cover the line exactly")
@allure.severity(allure.severity_level.CRITICAL)
@settings(max_examples=300)
@given(line=st.text(min_size=1, max_size=200), language=language_strategy)
def test_tokens_concatenate_to_line(line: str, language: str):
    """Joining token texts gives back the original line, for any line."""
    tokens = highlight_line(line, language)

    assert tokens
    assert "".join(token.text for token in tokens) == line
    assert all(token.text for token in tokens)


@allure.feature("Syntax Highlighting")
@allure.story("Round-trip: tokens cover the line exactly")
@allure.severity(allure.severity_level.CRITICAL)
@settings(max_examples=300)
@given(line=code_like_strategy, language=language_strategy)
def test_code_like_lines_round_trip(line: str, language: str):
    """Lines dense in quotes, comments and punctuation still round-trip."""
    tokens = highlight_line(line, language)

    assert "".join(token.text for token in tokens) == line


@allure.feature("Syntax Highlighting")
@allure.story("Empty lines")
@allure.severity(allure.severity_level.NORMAL)
def test_empty_line_is_single_space():
    """An empty line yields one plain space token."""
    assert highlight_line("", "swift") == [SyntaxToken(" ", TokenType.PLAIN)]
    assert highlight_line("") == [EMPTY_LINE_TOKEN]


@allure.feature("Syntax Highlighting")
@allure.story("Classification")
@allure.severity(allure.severity_level.NORMAL)
def test_swift_let_statement():
    """Keywords, identifiers, punctuation and numbers in a Swift line."""
    assert _types(highlight_line("let x = 1", "swift")) == [
        ("let", TokenType.KEYWORD),
        (" ", TokenType.PLAIN),
        ("x", TokenType.PLAIN),
        (" ", TokenType.PLAIN),
        ("=", TokenType.PUNCTUATION),
        (" ", TokenType.PLAIN),
        ("1", TokenType.NUMBER),
    ]


@allure.feature("Syntax Highlighting")
@allure.story("Classification")
@allure.severity(allure.severity_level.NORMAL)
def test_function_call_and_string():
    """An identifier before "(" is a function; quoted text is a string."""
    tokens = highlight_line('print("hi")', "python")

    assert _types(tokens) == [
        ("print", TokenType.FUNCTION),
        ("(", TokenType.PUNCTUATION),
        ('"hi"', TokenType.STRING),
        (")", TokenType.PUNCTUATION),
    ]


@allure.feature("Syntax Highlighting")
@allure.story("Classification")
@allure.severity(allure.severity_level.NORMAL)
def test_function_name_with_space_before_paren():
    """Whitespace between a name and "(" still makes it a function."""
    tokens = highlight_line("foo (1)", "js")

    assert tokens[0] == SyntaxToken("foo", TokenType.FUNCTION)


@allure.feature("Syntax Highlighting")
@allure.story("Classification")
@allure.severity(allure.severity_level.NORMAL)
@pytest.mark.parametrize("line,language,comment", [
    ("x = 1 // note", "js", "// note"),
    ("x = 1 # note", "python", "# note"),
    ("a /* b */ c", "go", "/* b */"),
])
def test_comments(line, language, comment):
    """Line and block comments become a single comment token."""
    tokens = highlight_line(line, language)

    assert SyntaxToken(comment, TokenType.COMMENT) in tokens


@allure.feature("Syntax Highlighting")
@allure.story("Classification")
@allure.severity(allure.severity_level.NORMAL)
def test_escaped_quote_stays_in_string():
    """A backslash-escaped quote does not end a string."""
    tokens = highlight_line(r'"a\"b" + c', "js")

    assert tokens[0] == SyntaxToken(r'"a\"b"', TokenType.STRING)


@allure.feature("Syntax Highlighting")
@allure.story("Reclassification")
@allure.severity(allure.severity_level.NORMAL)
@pytest.mark.parametrize("word,language,expected", [
    ("func", "swift", TokenType.KEYWORD),
    ("def", "py", TokenType.KEYWORD),
    ("def", "swift", TokenType.PLAIN),
    ("String", "swift", TokenType.TYPE),
    ("MyWidget", "cobol", TokenType.TYPE),
    ("X", "swift", TokenType.PLAIN),
    ("value", "swift", TokenType.PLAIN),
    ("_Private", "swift", TokenType.PLAIN),
])
def test_word_reclassification(word, language, expected):
    """Keywords first, then type words or PascalCase, else plain."""
    assert highlight_line(word, language) == [SyntaxToken(word, expected)]


@allure.feature("Syntax Highlighting")
@allure.story("Numbers")
@allure.severity(allure.severity_level.NORMAL)
@pytest.mark.parametrize("line,number", [
    ("3.14", "3.14"),
    ("x = 42;", "42"),
    ("(7)", "7"),
])
def test_number_literals(line, number):
    """Integer and decimal literals are numbers."""
    assert SyntaxToken(number, TokenType.NUMBER) in highlight_line(line, "swift")


@allure.feature("Syntax Highlighting")
@allure.story("Forward progress on unknown characters")
@allure.severity(allure.severity_level.NORMAL)
def test_unknown_characters_are_single_plain_tokens():
    """Characters no pattern knows are consumed one at a time."""
    assert highlight_line("$`", "swift") == [
        SyntaxToken("$", TokenType.PLAIN),
        SyntaxToken("`", TokenType.PLAIN),
    ]


@allure.feature("Syntax Highlighting")
@allure.story("Whole code blocks")
@allure.severity(allure.severity_level.NORMAL)
def test_highlight_code_one_list_per_line():
    """Every line of a block gets its own token list, blanks included."""
    lines = highlight_code("let a = 1\n\nreturn a", "swift")

    assert len(lines) == 3
    assert lines[1] == [EMPTY_LINE_TOKEN]
    assert lines[2][0] == SyntaxToken("return", TokenType.KEYWORD)


@allure.feature("Syntax Highlighting")
@allure.story("Language resolution")
@allure.severity(allure.severity_level.NORMAL)
@pytest.mark.parametrize("name,expected", [
    ("js", Language.JAVASCRIPT),
    ("JSX", Language.JAVASCRIPT),
    ("tsx", Language.JAVASCRIPT),
    (" Python ", Language.PYTHON),
    ("sh", Language.SHELL),
    ("kt", Language.JVM),
    ("", Language.GENERIC),
    ("brainfuck", Language.GENERIC),
])
def test_resolve_language(name, expected):
    """Aliases map case-insensitively; unknown names fall back to generic."""
    assert resolve_language(name) is expected


@allure.feature("Syntax Highlighting")
@allure.story("Language resolution")
@allure.severity(allure.severity_level.MINOR)
def test_aliases_share_one_keyword_table():
    """Every alias of a language uses that language's table."""
    tables = {id(keywords_for(resolve_language(name))) for name in ("js", "javascript", "jsx", "tsx", "ts")}

    assert len(tables) == 1
    assert "const" in keywords_for(Language.JAVASCRIPT)
