"""Markdown-aware splitting of text into lines, paragraphs and sentences.

All offsets returned here are ``str`` indices into the original text. The
sentence ``text`` is always the exact slice ``text[start:start + len(text)]``,
so only whitespace separates consecutive sentences.
"""

from __future__ import annotations

from typing import NamedTuple


class Sentence(NamedTuple):
    text: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)


class Paragraph(NamedTuple):
    text: str
    start: int


class Line(NamedTuple):
    number: int
    text: str
    start: int


_TERMINATORS = frozenset(".!?")


def numbered_marker_length(text: str) -> int:
    """Length of a leading ``N.`` / ``N)`` marker plus trailing whitespace, else 0.

    Any character may follow the punctuation: ``1.x`` counts as a marker.
    """
    index = 0
    while index < len(text) and text[index].isdigit():
        index += 1
    if index == 0 or index >= len(text) or text[index] not in ".)":
        return 0
    index += 1
    while index < len(text) and text[index] in " \t":
        index += 1
    return index


def starts_with_marker(text: str) -> bool:
    """True when ``text`` opens with a heading, bullet or numbered-list marker."""
    return (
        text.startswith("#")
        or text.startswith("- ")
        or text.startswith("* ")
        or numbered_marker_length(text) > 0
    )


def bullet_marker_length(text: str) -> int:
    """Length of the bullet marker at the start of an already left-stripped line."""
    if text.startswith("- ") or text.startswith("* "):
        return 2
    return numbered_marker_length(text)


def split_lines(text: str) -> list[Line]:
    lines: list[Line] = []
    offset = 0
    for number, raw in enumerate(text.split("\n"), start=1):
        lines.append(Line(number, raw, offset))
        offset += len(raw) + 1
    return lines


def split_paragraphs(text: str) -> list[Paragraph]:
    """Split on ``\\n\\n``. An empty document yields one empty paragraph."""
    if not text:
        return [Paragraph("", 0)]
    paragraphs: list[Paragraph] = []
    last = 0
    while True:
        index = text.find("\n\n", last)
        if index < 0:
            break
        paragraphs.append(Paragraph(text[last:index], last))
        last = index + 2
    paragraphs.append(Paragraph(text[last:], last))
    return paragraphs


def _skip_blanks(text: str, index: int) -> int:
    while index < len(text) and text[index] in " \t\r":
        index += 1
    return index


def _newline_closes(text: str, segment: str, index: int) -> bool:
    """Decide whether the newline at ``index`` ends the current sentence."""
    if starts_with_marker(segment.lstrip()):
        return True
    following = _skip_blanks(text, index + 1)
    if following < len(text) and text[following] == "\n":
        # blank line: paragraph break
        return True
    return following < len(text) and starts_with_marker(text[following:following + 16])


def split_sentences(text: str) -> list[Sentence]:
    sentences: list[Sentence] = []
    segment_start = 0
    length = len(text)

    def close(end: int) -> None:
        segment = text[segment_start:end]
        stripped = segment.strip()
        if stripped:
            lead = len(segment) - len(segment.lstrip())
            sentences.append(Sentence(stripped, segment_start + lead))

    for index, char in enumerate(text):
        if char in _TERMINATORS:
            nxt = index + 1
            if nxt < length and not text[nxt].isspace():
                continue
            pending = text[segment_start:nxt].strip()
            if char == "." and numbered_marker_length(pending) == len(pending):
                continue
            close(nxt)
            segment_start = nxt
        elif char == "\n":
            if _newline_closes(text, text[segment_start:index], index):
                close(index)
                segment_start = index + 1
    if segment_start < length:
        close(length)
    return sentences


def count_words(text: str) -> int:
    """Whitespace-separated tokens containing at least one letter."""
    return sum(1 for token in text.split() if any(c.isalpha() for c in token))
