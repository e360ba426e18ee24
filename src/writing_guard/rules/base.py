"""Per-analysis state shared by every detector.

A ``RuleContext`` is built once per ``Analyzer.analyze`` call. It owns the
segmentation, the disabled-range index and the diagnostics buffer; detectors
read the structure and push findings through :meth:`RuleContext.emit`, which
applies the universal gates.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING, Callable, NamedTuple

from writing_guard.disabled import DisabledRanges
from writing_guard.location import LineIndex
from writing_guard.matchers import has_citation, has_specificity
from writing_guard.models import Category, Diagnostic, Severity
from writing_guard.segment import Line, Paragraph, Sentence, bullet_marker_length

if TYPE_CHECKING:
    from writing_guard.config import Config
    from writing_guard.matchers import PhraseMatcher
    from writing_guard.profiles import ProfileRuntime


@dataclass(frozen=True)
class GlobalMatchers:
    """Compiled config-level matchers, owned by the analyzer."""

    puffery: PhraseMatcher | None
    weasel: PhraseMatcher | None
    marketing: PhraseMatcher | None
    buzzwords: PhraseMatcher | None
    transitions: PhraseMatcher | None
    templates: tuple = ()


class Heading(NamedTuple):
    level: int
    content: str
    line: Line


class BulletItem(NamedTuple):
    line: Line
    indent: int
    content: str
    content_start: int


def heading_of(line: Line) -> Heading | None:
    """Parse an ATX heading (``## Title``); ``#tag`` without a space is not one."""
    stripped = line.text.lstrip()
    if not stripped.startswith("#"):
        return None
    level = len(stripped) - len(stripped.lstrip("#"))
    rest = stripped[level:]
    if level > 6 or (rest and not rest[0].isspace()):
        return None
    content = rest.strip().rstrip("#").strip()
    return Heading(level, content, line)


def bullet_of(line: Line) -> BulletItem | None:
    stripped = line.text.lstrip()
    marker = bullet_marker_length(stripped)
    if marker == 0:
        return None
    indent = len(line.text) - len(stripped)
    return BulletItem(line, indent, stripped[marker:].rstrip(), line.start + indent + marker)


def is_structural_sentence(sentence: Sentence) -> bool:
    """Headings and bullet items are not running prose."""
    return sentence.text.startswith("#") or bullet_marker_length(sentence.text) > 0


@dataclass
class RuleContext:
    text: str
    config: Config
    profile: ProfileRuntime
    matchers: GlobalMatchers
    allowlist: frozenset[str]
    lines: list[Line]
    sentences: list[Sentence]
    paragraphs: list[Paragraph]
    disabled: DisabledRanges
    index: LineIndex
    diagnostics: list[Diagnostic] = field(default_factory=list)

    # -- emission ---------------------------------------------------------

    def emit(
        self,
        category: Category,
        severity: Severity,
        start: int,
        end: int,
        message: str,
        suggestion: str | None = None,
        snippet: str | None = None,
    ) -> bool:
        """Push a diagnostic unless a disable range, ignored line or allowlist gates it."""
        end = max(start, min(end, len(self.text)))
        if self.disabled.is_category_disabled(start, category):
            return False
        location = self.index.location(start)
        if self.disabled.is_line_ignored(location.line):
            return False
        if snippet is None:
            snippet = self.text[start:end].strip()
        if snippet.lower() in self.allowlist:
            return False
        self.diagnostics.append(
            Diagnostic(
                category=category,
                severity=severity,
                message=message,
                suggestion=suggestion,
                location=location,
                span=(self.index.byte_offset(start), self.index.byte_offset(end)),
                snippet=snippet,
            )
        )
        return True

    # -- shared structure -------------------------------------------------

    @cached_property
    def _sentence_starts(self) -> list[int]:
        return [s.start for s in self.sentences]

    def sentence_at(self, offset: int) -> int | None:
        """Index of the sentence containing ``offset``, if any."""
        position = bisect_right(self._sentence_starts, offset) - 1
        if position >= 0 and offset < self.sentences[position].end:
            return position
        return None

    @cached_property
    def citations(self) -> list[bool]:
        return [has_citation(s.text) for s in self.sentences]

    @cached_property
    def specificity(self) -> list[bool]:
        return [has_specificity(s.text) for s in self.sentences]

    def cited(self, offset: int) -> bool:
        position = self.sentence_at(offset)
        return position is not None and self.citations[position]

    @cached_property
    def prose_sentences(self) -> list[Sentence]:
        """Sentences outside disabled regions that are neither headings nor bullets."""
        return [
            s
            for s in self.sentences
            if not self.disabled.is_disabled(s.start) and not is_structural_sentence(s)
        ]

    @cached_property
    def active_lines(self) -> list[Line]:
        return [line for line in self.lines if not self.disabled.is_disabled(line.start)]

    @cached_property
    def headings(self) -> list[Heading]:
        return [h for h in map(heading_of, self.active_lines) if h is not None and h.content]

    @cached_property
    def anchor(self) -> int | None:
        """First non-whitespace character outside disabled regions."""
        for offset, char in enumerate(self.text):
            if not char.isspace() and not self.disabled.is_disabled(offset):
                return offset
        return None

    def bullet_groups(self, skip: Callable[[Line], bool] | None = None) -> list[list[BulletItem]]:
        """Runs of consecutive bullet lines. Lines matching ``skip`` neither count nor break a run."""
        groups: list[list[BulletItem]] = []
        current: list[BulletItem] = []
        for line in self.lines:
            if skip is not None and skip(line):
                continue
            item = None if self.disabled.is_disabled(line.start) else bullet_of(line)
            if item is None:
                if current:
                    groups.append(current)
                current = []
            else:
                current.append(item)
        if current:
            groups.append(current)
        return groups


Rule = Callable[[RuleContext], None]
