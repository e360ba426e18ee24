from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Category(str, Enum):
    """Rule categories. Declaration order is the sort ordinal."""

    PUFFERY = "puffery"
    BUZZWORD = "buzzword"
    NEGATIVE_PARALLEL = "negative-parallelism"
    RULE_OF_THREE = "rule-of-three"
    CONNECTOR_GLUT = "connector-glut"
    TEMPLATE = "template"
    WEASEL = "weasel"
    TRANSITION = "transition"
    MARKETING = "marketing"
    EM_DASH = "em-dash"
    FORMATTING = "formatting"
    QUOTE_STYLE = "quote-style"
    SENTENCE_LENGTH = "sentence-length"
    CADENCE = "cadence"
    BROAD_TERM = "broad-term"
    TONE = "tone"
    REPETITION = "repetition"
    CALL_TO_ACTION = "call-to-action"
    CONFIDENCE = "confidence"
    STRUCTURE = "structure"
    TRIAD_SLOP = "triad-slop"
    SECTION_DENSITY = "section-density"

    def __str__(self) -> str:
        return self.value

    @property
    def ordinal(self) -> int:
        return _ORDINALS[self]

    @classmethod
    def from_name(cls, name: str) -> Category | None:
        """Look up a category by kebab-case value, snake_case name or alias."""
        key = name.strip().lower().replace("_", "-")
        if not key:
            return None
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return None


_ORDINALS = {category: index for index, category in enumerate(Category)}
_ALIASES = {
    "negative-parallel": "negative-parallelism",
    "quotes": "quote-style",
    "emdash": "em-dash",
    "cta": "call-to-action",
}


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    HINT = "hint"
    INFORMATION = "information"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Location:
    line: int
    column: int


@dataclass(frozen=True)
class Diagnostic:
    """A single finding. ``span`` holds UTF-8 byte offsets into the document."""

    category: Category
    severity: Severity
    message: str
    suggestion: str | None
    location: Location
    span: tuple[int, int]
    snippet: str

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.span[0], self.category.ordinal)

    def to_payload(self) -> dict[str, object]:
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "suggestion": self.suggestion,
            "location": {"line": self.location.line, "column": self.location.column},
            "span": {"start": self.span[0], "end": self.span[1]},
            "snippet": self.snippet,
        }


@dataclass
class DocumentReport:
    word_count: int
    diagnostics: list[Diagnostic]
    category_counts: dict[Category, int] = field(default_factory=dict)
    profile: str = "default"

    @property
    def density_per_100_words(self) -> float:
        """Diagnostics per 100 words; the raw count for an empty document."""
        if self.word_count == 0:
            return float(len(self.diagnostics))
        return len(self.diagnostics) * 100.0 / self.word_count

    def to_payload(self) -> dict[str, object]:
        return {
            "word_count": self.word_count,
            "profile": self.profile,
            "density_per_100_words": round(self.density_per_100_words, 4),
            "category_counts": {c.value: n for c, n in self.category_counts.items()},
            "diagnostics": [d.to_payload() for d in self.diagnostics],
        }
