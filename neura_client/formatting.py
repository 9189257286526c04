"""Answer formatting for the terminal UI.

Answers are split into segments first and rendered second, so the parsing
rules can be tested without a console.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from rich.console import RenderableType
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from .themes import LIGHT, Palette

FENCE_RE = re.compile(r"(```[\s\S]*?```)")
INLINE_CODE_RE = re.compile(r"(`[^`]+`)")
BOLD_RE = re.compile(r"\*\*(.+?)\*\*", re.DOTALL)

# First fence line is treated as a language label only if shorter than this.
MAX_LABEL_LENGTH = 20


@dataclass(frozen=True)
class TextSegment:
    text: str


@dataclass(frozen=True)
class InlineCodeSegment:
    code: str


@dataclass(frozen=True)
class BoldSegment:
    text: str


@dataclass(frozen=True)
class CodeBlockSegment:
    language: str
    code: str


Segment = Union[TextSegment, InlineCodeSegment, BoldSegment, CodeBlockSegment]


def format_answer(text: str | None) -> list[Segment]:
    """Split answer text into display segments.

    Triple-backtick regions become code blocks, single-backtick spans become
    inline code and ``**text**`` becomes bold. An unterminated fence is left
    as plain text.
    """
    if not text:
        return []

    segments: list[Segment] = []
    # re.split with one capture group puts fenced regions at odd indices.
    for index, part in enumerate(FENCE_RE.split(text)):
        if index % 2:
            segments.append(_code_block(part[3:-3]))
        elif part:
            segments.extend(_inline_segments(part))
    return segments


def _code_block(inner: str) -> CodeBlockSegment:
    head, newline, rest = inner.partition("\n")
    label = head.strip()
    if newline and label and len(label) < MAX_LABEL_LENGTH and not any(c.isspace() for c in label):
        return CodeBlockSegment(language=label, code=rest.strip("\n").rstrip())
    return CodeBlockSegment(language="", code=inner.strip())


def _inline_segments(text: str) -> list[Segment]:
    segments: list[Segment] = []
    for index, part in enumerate(INLINE_CODE_RE.split(text)):
        if index % 2:
            segments.append(InlineCodeSegment(code=part[1:-1]))
        elif part:
            segments.extend(_bold_segments(part))
    return segments


def _bold_segments(text: str) -> list[Segment]:
    segments: list[Segment] = []
    position = 0
    for match in BOLD_RE.finditer(text):
        if match.start() > position:
            segments.append(TextSegment(text=text[position:match.start()]))
        segments.append(BoldSegment(text=match.group(1)))
        position = match.end()
    if position < len(text):
        segments.append(TextSegment(text=text[position:]))
    return segments


def code_blocks(segments: list[Segment]) -> list[str]:
    """Code block bodies in display order, for the copy command."""
    return [segment.code for segment in segments if isinstance(segment, CodeBlockSegment)]


def render_answer(segments: list[Segment], palette: Palette = LIGHT) -> list[RenderableType]:
    """Turn segments into rich renderables.

    Runs of text, inline code and bold are merged into one ``Text``; each
    code block becomes a ``Panel`` numbered for ``/copy``.
    """
    renderables: list[RenderableType] = []
    line = Text(overflow="fold")
    block_number = 0

    for segment in segments:
        if isinstance(segment, CodeBlockSegment):
            if line.plain.strip():
                line.rstrip()
                renderables.append(line)
            line = Text(overflow="fold")
            block_number += 1
            renderables.append(_code_panel(segment, block_number, palette))
        elif isinstance(segment, InlineCodeSegment):
            line.append(segment.code, style=palette.inline_code)
        elif isinstance(segment, BoldSegment):
            line.append(segment.text, style="bold")
        else:
            line.append(segment.text)

    if line.plain.strip():
        line.rstrip()
        renderables.append(line)
    return renderables


def _code_panel(segment: CodeBlockSegment, number: int, palette: Palette) -> Panel:
    syntax = Syntax(
        segment.code,
        segment.language or "text",
        theme=palette.syntax_theme,
        word_wrap=True,
    )
    return Panel(
        syntax,
        title=segment.language or "code",
        title_align="left",
        subtitle=f"/copy {number}",
        subtitle_align="right",
        border_style=palette.code_border,
    )
