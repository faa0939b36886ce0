"""Single-line preview text around a match."""

from __future__ import annotations

import re
from dataclasses import dataclass

from pyqt_refview.nodes import Position, TextDocument, TextRange

_WORD_CHAR = re.compile(r"\w")
_LEADING_WS = re.compile(r"^\s+")
_TRAILING_WS = re.compile(r"\s+$")


@dataclass(frozen=True)
class PreviewChunks:
    before: str
    inside: str
    after: str

    @property
    def text(self) -> str:
        return self.before + self.inside + self.after

    @property
    def highlight(self) -> tuple:
        start = len(self.before)
        return (start, start + len(self.inside))


def _word_start(line: str, character: int) -> int:
    while character > 0 and _WORD_CHAR.match(line[character - 1]):
        character -= 1
    return character


def get_preview_chunks(
    document: TextDocument,
    text_range: TextRange,
    before_chars: int = 8,
    after_chars: int = 331,
    trim: bool = True,
) -> PreviewChunks:
    """Split the text around ``text_range`` into before/inside/after chunks.

    ``before`` starts ``before_chars`` ahead of the match, widened to the start
    of the word it lands in or directly follows. ``after`` stops at the end of
    the match's last line or after ``after_chars`` characters.
    """
    start, end = text_range.start, text_range.end
    start_line = document.line_at(start.line)
    preview_start = _word_start(start_line, max(0, start.character - before_chars))
    before = start_line[preview_start:start.character]

    inside = document.get_text(text_range)

    end_line = document.line_at(end.line)
    after = document.get_text(
        TextRange(end, Position(end.line, min(len(end_line), end.character + after_chars)))
    )

    if trim:
        before = _LEADING_WS.sub("", before)
        after = _TRAILING_WS.sub("", after)
    return PreviewChunks(before, inside, after)
