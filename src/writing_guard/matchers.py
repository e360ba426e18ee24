"""Phrase scanners and the static regex bank shared by the detectors."""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from writing_guard.errors import PatternCompileError

# ---------------------------------------------------------------------------
# Word boundaries
# ---------------------------------------------------------------------------

ALLOWED_SUFFIXES: tuple[str, ...] = ("ing", "es", "ed", "ly", "s", "d")


def is_word_char(char: str) -> bool:
    return char.isalnum() or char in "_-'"


def has_word_boundary(text: str, start: int, end: int) -> bool:
    """Check that ``text[start:end]`` is a whole word, allowing English suffixes.

    ``utilize`` matches inside ``utilized`` but not inside ``utilized_internally``.
    """
    if start > 0 and is_word_char(text[start - 1]):
        return False
    if end >= len(text) or not is_word_char(text[end]):
        return True
    for suffix in ALLOWED_SUFFIXES:
        stop = end + len(suffix)
        if text[end:stop].lower() != suffix:
            continue
        if stop >= len(text) or not is_word_char(text[stop]):
            return True
    return False


# ---------------------------------------------------------------------------
# Phrase matcher
# ---------------------------------------------------------------------------


class PhraseMatcher:
    """Case-insensitive multi-phrase scanner.

    All phrases are folded into one alternation, longest first, so the scan is a
    single left-to-right pass that prefers the longest phrase at a position.
    When that phrase fails the word-boundary check, the shorter phrases starting
    at the same position are tried before the scan moves on.
    """

    def __init__(self, phrases: Iterable[str]) -> None:
        unique = {p.strip().lower() for p in phrases if p and p.strip()}
        self.phrases: tuple[str, ...] = tuple(sorted(unique, key=lambda p: (-len(p), p)))
        self._pattern = (
            re.compile("|".join(re.escape(p) for p in self.phrases), re.IGNORECASE)
            if self.phrases
            else None
        )
        lengths = sorted({len(p) for p in self.phrases}, reverse=True)
        self._by_length = tuple(
            re.compile("|".join(re.escape(p) for p in self.phrases if len(p) == n), re.IGNORECASE)
            for n in lengths
        )

    @classmethod
    def build(cls, phrases: Iterable[str]) -> PhraseMatcher | None:
        matcher = cls(phrases)
        return matcher if matcher else None

    def __bool__(self) -> bool:
        return self._pattern is not None

    def finditer(self, text: str, pos: int = 0, endpos: int | None = None) -> Iterator[tuple[int, int]]:
        """Yield ``(start, end)`` of every non-overlapping phrase on word boundaries."""
        if self._pattern is None:
            return
        endpos = len(text) if endpos is None else endpos
        while pos < endpos:
            match = self._pattern.search(text, pos, endpos)
            if match is None:
                return
            start = match.start()
            end = self._longest_at(text, start, endpos)
            if end is None:
                pos = start + 1
            else:
                yield start, end
                pos = end

    def _longest_at(self, text: str, start: int, endpos: int) -> int | None:
        for pattern in self._by_length:
            match = pattern.match(text, start, endpos)
            if match is not None and has_word_boundary(text, start, match.end()):
                return match.end()
        return None

    def search(self, text: str, pos: int = 0, endpos: int | None = None) -> tuple[int, int] | None:
        return next(self.finditer(text, pos, endpos), None)


# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------


def compile_user_regex(pattern: str, flags: int = 0) -> re.Pattern[str]:
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise PatternCompileError(pattern, str(exc)) from exc


def compile_user_regexes(patterns: Iterable[str], flags: int = 0) -> tuple[re.Pattern[str], ...]:
    return tuple(compile_user_regex(p.strip(), flags) for p in patterns if p and p.strip())


URL_RE = re.compile(r"\b(?:https?://|www\.)[^\s<>()\[\]\"'`]+", re.IGNORECASE)

RULE_OF_THREE_RE = re.compile(r"\b[\w-]+,\s+[\w-]+,\s+(?:and|&)\s+[\w-]+", re.IGNORECASE)
TRI_RANGE_RE = re.compile(r"\bfrom [^\n,.;]+ to [^\n,.;]+ to [^\n,.;]+", re.IGNORECASE)

_UNITS = (
    r"ms|us|ns|s|sec|secs|seconds|min|mins|minutes|h|hrs|hours|days|weeks|"
    r"b|kb|mb|gb|tb|kib|mib|gib|px|em|rem|pt|hz|khz|mhz|ghz|rps|qps|tps|"
    r"x|k|m|cores|threads|nodes|users|requests|rows|lines|files|tokens|"
    r"°c|°f|km|cm|mm|kg|g|mg|w|kw|v"
)
SPECIFICITY_RE = re.compile(
    r"\bv\d+(?:\.\d+)*\b"                               # v2, v1.4
    r"|\b\d+\.\d+(?:\.\d+)+\b"                          # 1.2.3
    r"|(?<![\w&])#\d+\b"                                # #123
    r"|\b[A-Za-z][A-Za-z0-9]*_[A-Za-z0-9_]+\b"          # snake_case, CONSTANT_NAME
    r"|(?:\.{1,2}/|(?<![\w/.])/)\w[\w.-]*(?:/[\w.-]+)*"  # ./x, ../x, /abs/path
    r"|\b[\w.-]+/[\w.-]+/[\w./-]*"                      # a/b/c
    r"|\b[\w-]*\.[\w.-]*/[\w./-]*[\w-]"                 # dotted segment before a slash
    r"|\b[\w-]+/[\w-]*\.[\w.-]*\w"                      # dotted segment after a slash
    r"|\b[\w-]+\.(?:py|rs|js|ts|tsx|go|java|rb|md|rst|txt|yml|yaml|json|toml|cfg|ini|sh|c|h|cpp)\b"
    r"|\b(?:https?://|www\.)\S+"
    r"|\b(?:fig(?:ure)?|table|section|eq(?:uation)?|listing|appendix)\.?\s*\d+"
    r"|\b\d+(?:[.,]\d+)?\s?(?:%|(?:" + _UNITS + r")\b)",
    re.IGNORECASE,
)
# camelCase identifiers and ticket IDs only make sense case-sensitively
SPECIFICITY_CASED_RE = re.compile(r"\b[a-z]+[A-Z][A-Za-z0-9]*\b|\b[A-Z][A-Z0-9]+-\d+\b")

CITATION_RE = re.compile(
    r"\[\d+(?:\s*[,–-]\s*\d+)*\]"                              # [1], [2, 3], [4-6]
    r"|\[[^\]\n]+\]\([^)\s]+\)"                                # [label](url)
    r"|\([A-Z][A-Za-z'’-]+(?: et al\.?)?(?:,? (?:and|&) [A-Z][A-Za-z'’-]+)?,? \d{4}[a-z]?\)"
    r"|\bdoi:\s*\S+|\b10\.\d{4,9}/\S+"
    r"|\b(?:https?://|www\.)\S+"
)

PERCENT_CONTEXT_RE = re.compile(
    r"\d{2,}(?:\.\d+)?%\s+(?:of|coverage|uptime|availability|requests|traffic|users|"
    r"customers|respondents|tests|samples|cases|errors|latency|reduction|increase|"
    r"decrease|growth|more|fewer|less|faster|slower|confidence|ci|percentile)\b",
    re.IGNORECASE,
)
CONFIDENCE_PERCENT_RE = re.compile(r"\b\d{2,}(?:\.\d+)?%")

PASSIVE_RE = re.compile(
    r"\b(?:am|is|are|was|were|be|been|being)\s+(?:\w+ly\s+)?\w+(?:ed|en)\b",
    re.IGNORECASE,
)
BOLD_SPAN_RE = re.compile(r"\*\*[^*\n]+?\*\*|__[^_\n]+?__")
MID_SENTENCE_QUESTION_RE = re.compile(r"\?\s+[a-z]")

CONNECTORS: tuple[str, ...] = (
    "however", "furthermore", "moreover", "nevertheless", "nonetheless", "consequently",
    "therefore", "thus", "accordingly", "as a result", "in addition", "at the same time",
)
CONNECTOR_RE = re.compile(r"\b(?:" + "|".join(re.escape(c) for c in CONNECTORS) + r")\b", re.IGNORECASE)


def has_specificity(text: str) -> bool:
    """True when ``text`` names something concrete enough to excuse one generic word."""
    return SPECIFICITY_CASED_RE.search(text) is not None or SPECIFICITY_RE.search(text) is not None


def has_citation(text: str) -> bool:
    return CITATION_RE.search(text) is not None


# ---------------------------------------------------------------------------
# Replacement table for throttled buzzwords
# ---------------------------------------------------------------------------

_REPLACEMENTS = {
    "delve into": "look at",
    "navigate the landscape": "map the area",
    "delve": "look at",
    "deep dive": "look closely",
    "underscores": "shows",
    "showcasing": "showing",
    "pivotal": "important",
    "realm": "field",
    "meticulous": "detailed",
    "leverage": "use",
    "utilise": "use",
    "utilize": "use",
    "facilitate": "help",
    "optimise": "improve",
    "optimize": "improve",
    "embark": "start",
    "embark on a journey": "start",
    "underscore": "highlight",
    "aims to explore": "studies",
    "aligns": "fits",
    "seamless": "smooth",
    "seamlessly": "smoothly",
    "robust": "solid",
    "robustly": "solidly",
    "innovative": "new",
    "transformative": "changing",
    "unprecedented": "new",
    "plethora": "many",
    "empower": "help",
}


def replacement_for(phrase: str) -> str | None:
    word = _REPLACEMENTS.get(phrase.lower())
    return f"Try `{word}`." if word else None
