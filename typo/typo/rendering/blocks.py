"""Block-level markdown parser.

Turns text into an ordered list of structural blocks in a single
left-to-right pass over its lines. Only headings (up to level 3),
bullet and numbered list items, paragraphs and fenced code blocks are
recognised.
"""

import re
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Heading:
    """A heading line; level is 1-3."""
    level: int
    text: str


@dataclass(frozen=True)
class BulletItem:
    """A "- " or "* " list item."""
    text: str


@dataclass(frozen=True)
class NumberedItem:
    """A numbered list item; marker keeps the number and dot, e.g. "2."."""
    marker: str
    text: str


@dataclass(frozen=True)
class Paragraph:
    """Consecutive prose lines joined with single spaces."""
    text: str


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block with its lines kept verbatim."""
    language: str
    raw_code: str


Block = Union[Heading, BulletItem, NumberedItem, Paragraph, CodeBlock]


FENCE = "```"
_NUMBERED_PATTERN = re.compile(r'^\d+\.\s+')


def _is_fence(trimmed: str) -> bool:
    return trimmed.startswith(FENCE)


def _is_bullet(trimmed: str) -> bool:
    return trimmed.startswith("- ") or trimmed.startswith("* ")


def _starts_block(trimmed: str) -> bool:
    """Check whether a trimmed line ends a paragraph in progress."""
    return (
        not trimmed
        or _is_fence(trimmed)
        or trimmed.startswith("#")
        or _is_bullet(trimmed)
        or _NUMBERED_PATTERN.match(trimmed) is not None
    )


def _heading(trimmed: str) -> Heading:
    if trimmed.startswith("###"):
        level = 3
    elif trimmed.startswith("##"):
        level = 2
    else:
        level = 1

    content = trimmed[level:]
    if content.startswith(" "):
        content = content[1:]
    return Heading(level=level, text=content)


def parse_blocks(text: str) -> list[Block]:
    """Parse markdown text into blocks.

    Args:
        text: Markdown source

    Returns:
        Blocks in document order

    Examples:
        >>> parse_blocks("# Title\\n\\nSome **bold** text.")
        [Heading(level=1, text='Title'), Paragraph(text='Some **bold** text.')]
    """
    blocks: list[Block] = []
    lines = text.split("\n")
    i = 0

    while i < len(lines):
        trimmed = lines[i].strip()

        if _is_fence(trimmed):
            language = trimmed[len(FENCE):].strip()
            code_lines = []
            i += 1
            while i < len(lines):
                if _is_fence(lines[i].strip()):
                    i += 1
                    break
                code_lines.append(lines[i])
                i += 1
            blocks.append(CodeBlock(language=language, raw_code="\n".join(code_lines)))
            continue

        if trimmed.startswith("#"):
            blocks.append(_heading(trimmed))
            i += 1
            continue

        if _is_bullet(trimmed):
            blocks.append(BulletItem(text=trimmed[2:]))
            i += 1
            continue

        match = _NUMBERED_PATTERN.match(trimmed)
        if match:
            blocks.append(NumberedItem(
                marker=match.group(0).strip(),
                text=trimmed[match.end():],
            ))
            i += 1
            continue

        if not trimmed:
            i += 1
            continue

        paragraph_lines = []
        while i < len(lines):
            p_trimmed = lines[i].strip()
            if _starts_block(p_trimmed):
                break
            paragraph_lines.append(p_trimmed)
            i += 1

        blocks.append(Paragraph(text=" ".join(paragraph_lines)))

    return blocks
