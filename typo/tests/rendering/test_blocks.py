"""
Tests for the block-level markdown parser.
"""

import allure
import pytest
from hypothesis import given, settings, strategies as st

from typo.rendering.blocks import (
    BulletItem,
    CodeBlock,
    Heading,
    NumberedItem,
    Paragraph,
    parse_blocks,
)
from typo.rendering.inline import Bold, Plain, tokenize_inline


@allure.feature("Markdown Blocks")
@allure.story("Fenced code blocks")
@allure.severity(allure.severity_level.CRITICAL)
def test_fenced_code_block_with_language():
    """A fence with a language tag yields exactly one code block."""
    blocks = parse_blocks("```swift\nlet x = 1\n```")

    assert blocks == [CodeBlock(language="swift", raw_code="let x = 1")]


@allure.feature("Markdown Blocks")
@allure.story("Heading followed by paragraph")
@allure.severity(allure.severity_level.CRITICAL)
def test_heading_and_paragraph_with_inline_formatting():
    """A heading and a paragraph, whose text carries inline formatting."""
    blocks = parse_blocks("# Title\n\nSome **bold** text.")

    assert blocks == [Heading(level=1, text="Title"), Paragraph(text="Some **bold** text.")]
    assert tokenize_inline(blocks[1].text) == [Plain("Some "), Bold("bold"), Plain(" text.")]


@allure.feature("Markdown Blocks")
@allure.story("Fenced code blocks")
@allure.severity(allure.severity_level.NORMAL)
def test_code_lines_are_kept_verbatim():
    """Code lines keep their indentation and markdown-looking content."""
    text = "```python\ndef f():\n    # not a heading\n    - not a bullet\n```"

    blocks = parse_blocks(text)

    assert blocks == [CodeBlock(
        language="python",
        raw_code="def f():\n    # not a heading\n    - not a bullet",
    )]


@allure.feature("Markdown Blocks")
@allure.story("Fenced code blocks")
@allure.severity(allure.severity_level.NORMAL)
@pytest.mark.parametrize("text,expected", [
    ("```\ncode\n```", [CodeBlock(language="", raw_code="code")]),
    ("```  JS  \nx\n```", [CodeBlock(language="JS", raw_code="x")]),
    ("```\n```", [CodeBlock(language="", raw_code="")]),
    ("```go\nfunc main() {}", [CodeBlock(language="go", raw_code="func main() {}")]),
    ("```\na\n   ```trailing\nafter", [CodeBlock(language="", raw_code="a"), Paragraph("after")]),
])
def test_fence_edge_cases(text, expected):
    """Empty tags, empty bodies, unterminated fences and indented closers."""
    assert parse_blocks(text) == expected


@allure.feature("Markdown Blocks")
@allure.story("Headings")
@allure.severity(allure.severity_level.NORMAL)
@pytest.mark.parametrize("line,expected", [
    ("# One", Heading(1, "One")),
    ("## Two", Heading(2, "Two")),
    ("### Three", Heading(3, "Three")),
    ("#NoSpace", Heading(1, "NoSpace")),
    ("##  Two spaces", Heading(2, " Two spaces")),
    ("   ## Indented", Heading(2, "Indented")),
    ("#### Four", Heading(3, "# Four")),
])
def test_heading_levels(line, expected):
    """The leading # run and at most one space are stripped."""
    assert parse_blocks(line) == [expected]


@allure.feature("Markdown Blocks")
@allure.story("Lists")
@allure.severity(allure.severity_level.NORMAL)
def test_bullet_and_numbered_items():
    """List markers are recognised and stripped, numbered markers kept."""
    text = "- first\n* second\n1. one\n12.  twelve"

    assert parse_blocks(text) == [
        BulletItem("first"),
        BulletItem("second"),
        NumberedItem("1.", "one"),
        NumberedItem("12.", "twelve"),
    ]


@allure.feature("Markdown Blocks")
@allure.story("Lists")
@allure.severity(allure.severity_level.NORMAL)
@pytest.mark.parametrize("line", ["-no space", "*emphasis*", "1.no space", "1) paren"])
def test_list_lookalikes_are_paragraphs(line):
    """Markers without the required spacing are plain prose."""
    assert parse_blocks(line) == [Paragraph(line)]


@allure.feature("Markdown Blocks")
@allure.story("Paragraphs")
@allure.severity(allure.severity_level.NORMAL)
def test_paragraph_lines_are_trimmed_and_joined():
    """Consecutive prose lines are trimmed and joined with single spaces."""
    text = "  first line  \nsecond    line\n\tthird"

    assert parse_blocks(text) == [Paragraph("first line second    line third")]


@allure.feature("Markdown Blocks")
@allure.story("Paragraphs")
@allure.severity(allure.severity_level.NORMAL)
@pytest.mark.parametrize("interrupt,block", [
    ("", None),
    ("# Heading", Heading(1, "Heading")),
    ("- item", BulletItem("item")),
    ("3. item", NumberedItem("3.", "item")),
])
def test_paragraph_ends_at_block_start(interrupt, block):
    """Blank lines and block openers end a paragraph."""
    blocks = parse_blocks(f"one\ntwo\n{interrupt}\nthree")

    expected = [Paragraph("one two")]
    if block is not None:
        expected.append(block)
    expected.append(Paragraph("three"))
    assert blocks == expected


@allure.feature("Markdown Blocks")
@allure.story("Paragraphs")
@allure.severity(allure.severity_level.NORMAL)
def test_paragraph_ends_at_fence():
    """A fence ends a paragraph and opens a code block."""
    assert parse_blocks("text\n```\ncode\n```") == [
        Paragraph("text"),
        CodeBlock(language="", raw_code="code"),
    ]


@allure.feature("Markdown Blocks")
@allure.story("Blank input")
@allure.severity(allure.severity_level.MINOR)
@pytest.mark.parametrize("text", ["", "\n", "   \n\t\n  "])
def test_blank_input_has_no_blocks(text):
    """Blank lines produce nothing."""
    assert parse_blocks(text) == []


@allure.feature("Markdown Blocks")
@allure.story("Parser never fails")
@allure.severity(allure.severity_level.CRITICAL)
@settings(max_examples=200)
@given(text=st.text(alphabet=st.sampled_from("ab #-*1.`\n\t "), max_size=300))
def test_parse_accepts_any_text(text: str):
    """Any text parses, and no prose block comes back blank."""
    blocks = parse_blocks(text)

    for block in blocks:
        if isinstance(block, Paragraph):
            assert block.text.strip()
            assert "\n" not in block.text
