"""Regions of a document where some or all rules must stay silent.

The index is built once per analysis from the raw text: inline ``dwg:``
directives, YAML frontmatter, fenced code blocks, inline code spans and URLs.
Offsets are ``str`` indices; ranges are half-open ``[start, end)``.
"""

from __future__ import annotations

import re

from writing_guard.matchers import URL_RE
from writing_guard.models import Category
from writing_guard.segment import Line, split_lines

_OFF_RE = re.compile(r"<!--\s*dwg:off\s*-->")
_ON_RE = re.compile(r"<!--\s*dwg:on\s*-->")
_IGNORE_RE = re.compile(r"<!--\s*dwg:ignore(?:\s+(?P<names>[^>]*?))?\s*-->")
_END_IGNORE_RE = re.compile(r"<!--\s*dwg:end-ignore\s*-->")
_IGNORE_LINE_RE = re.compile(r"<!--\s*dwg:ignore-line\s*-->")
_FENCE_MARKERS = ("```", "~~~")

Range = tuple[int, int]


class DisabledRanges:
    def __init__(
        self,
        ranges: list[Range],
        scoped: dict[Category, list[Range]],
        ignored_lines: set[int],
    ) -> None:
        self.ranges = sorted(ranges)
        self.scoped = {category: sorted(spans) for category, spans in scoped.items()}
        self.ignored_lines = frozenset(ignored_lines)

    @classmethod
    def build(cls, text: str, lines: list[Line] | None = None) -> DisabledRanges:
        lines = lines if lines is not None else split_lines(text)
        ranges: list[Range] = []
        scoped: dict[Category, list[Range]] = {}
        ignored: set[int] = set()

        ranges.extend(_off_on_pairs(text))
        for names, span in _ignore_blocks(text):
            categories = [Category.from_name(name) for name in names]
            if not categories or any(category is None for category in categories):
                ranges.append(span)
            for category in categories:
                if category is not None:
                    scoped.setdefault(category, []).append(span)
        ignored.update(_ignored_lines(text, lines))

        frontmatter = _frontmatter(text, lines)
        if frontmatter is not None:
            ranges.append(frontmatter)
        fences = _fences(text, lines)
        ranges.extend(fences)
        ranges.extend(_inline_code(lines, fences))

        index = cls(ranges, scoped, ignored)
        urls = [m.span() for m in URL_RE.finditer(text) if not index.is_disabled(m.start())]
        if urls:
            index = cls(index.ranges + urls, scoped, ignored)
        return index

    def is_disabled(self, offset: int) -> bool:
        return any(start <= offset < end for start, end in self.ranges)

    def is_category_disabled(self, offset: int, category: Category) -> bool:
        if self.is_disabled(offset):
            return True
        return any(start <= offset < end for start, end in self.scoped.get(category, ()))

    def is_line_ignored(self, line: int) -> bool:
        return line in self.ignored_lines


def _off_on_pairs(text: str) -> list[Range]:
    ranges: list[Range] = []
    cursor = 0
    while True:
        off = _OFF_RE.search(text, cursor)
        if off is None:
            break
        on = _ON_RE.search(text, off.end())
        if on is None:
            ranges.append((off.start(), len(text)))
            break
        ranges.append((off.start(), on.end()))
        cursor = on.end()
    return ranges


def _ignore_blocks(text: str) -> list[tuple[list[str], Range]]:
    blocks: list[tuple[list[str], Range]] = []
    cursor = 0
    while True:
        opening = _IGNORE_RE.search(text, cursor)
        if opening is None:
            break
        names = [n for n in re.split(r"[\s,]+", opening.group("names") or "") if n]
        closing = _END_IGNORE_RE.search(text, opening.end())
        end = closing.end() if closing is not None else len(text)
        blocks.append((names, (opening.start(), end)))
        if closing is None:
            break
        cursor = end
    return blocks


def _ignored_lines(text: str, lines: list[Line]) -> set[int]:
    ignored: set[int] = set()
    for line in lines:
        marker = _IGNORE_LINE_RE.search(line.text)
        if marker is None:
            continue
        ignored.add(line.number)
        if line.text.strip() == marker.group(0):
            ignored.add(line.number + 1)
    return ignored


def _frontmatter(text: str, lines: list[Line]) -> Range | None:
    if not lines or lines[0].text.rstrip("\r") != "---":
        return None
    for line in lines[1:]:
        if line.text.rstrip("\r") in ("---", "..."):
            return (0, min(len(text), line.start + len(line.text) + 1))
    return (0, len(text))


def _fences(text: str, lines: list[Line]) -> list[Range]:
    fences: list[Range] = []
    open_at: int | None = None
    for line in lines:
        if not line.text.strip().startswith(_FENCE_MARKERS):
            continue
        if open_at is None:
            open_at = line.start
        else:
            fences.append((open_at, min(len(text), line.start + len(line.text) + 1)))
            open_at = None
    if open_at is not None:
        fences.append((open_at, len(text)))
    return fences


def _inline_code(lines: list[Line], fences: list[Range]) -> list[Range]:
    spans: list[Range] = []
    for line in lines:
        if any(start <= line.start < end for start, end in fences):
            continue
        body = line.text
        index = 0
        while index < len(body):
            if body[index] != "`":
                index += 1
                continue
            width = _backtick_run(body, index)
            closing = _closing_run(body, index + width, width)
            if closing < 0:
                index += width
                continue
            spans.append((line.start + index, line.start + closing + width))
            index = closing + width
    return spans


def _backtick_run(body: str, index: int) -> int:
    end = index
    while end < len(body) and body[end] == "`":
        end += 1
    return end - index


def _closing_run(body: str, index: int, width: int) -> int:
    """Find the next backtick run exactly ``width`` long, or -1."""
    while True:
        index = body.find("`", index)
        if index < 0:
            return -1
        run = _backtick_run(body, index)
        if run == width:
            return index
        index += run
