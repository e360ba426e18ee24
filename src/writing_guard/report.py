from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from writing_guard.config import ScoreThresholds
from writing_guard.models import Category, Diagnostic, DocumentReport


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Canonical order: span start, then category ordinal. Ties keep emission order."""
    return sorted(diagnostics, key=lambda d: d.sort_key)


def count_by_category(diagnostics: Iterable[Diagnostic]) -> dict[Category, int]:
    counts: dict[Category, int] = {}
    for diagnostic in diagnostics:
        counts[diagnostic.category] = counts.get(diagnostic.category, 0) + 1
    return dict(sorted(counts.items(), key=lambda item: item[0].ordinal))


def build_report(word_count: int, diagnostics: Iterable[Diagnostic], profile: str) -> DocumentReport:
    ordered = sort_diagnostics(diagnostics)
    return DocumentReport(
        word_count=word_count,
        diagnostics=ordered,
        category_counts=count_by_category(ordered),
        profile=profile,
    )


def density(diagnostic_count: int, word_count: int) -> float:
    if word_count == 0:
        return float(diagnostic_count)
    return diagnostic_count * 100.0 / word_count


def exceeds_threshold(report: DocumentReport, scores: ScoreThresholds, strict: bool = False) -> bool:
    """True when ``report`` should fail the run under the exit-code contract."""
    value = report.density_per_100_words
    if value >= scores.fail_threshold_per_100w:
        return True
    return strict and value >= scores.warn_threshold_per_100w


@dataclass
class FileResult:
    path: str
    report: DocumentReport

    def to_payload(self) -> dict[str, object]:
        payload = {"path": self.path}
        payload.update(self.report.to_payload())
        return payload


@dataclass
class RunSummary:
    files: list[FileResult]

    @property
    def total_word_count(self) -> int:
        return sum(f.report.word_count for f in self.files)

    @property
    def total_diagnostics(self) -> int:
        return sum(len(f.report.diagnostics) for f in self.files)

    @property
    def density_per_100_words(self) -> float:
        return density(self.total_diagnostics, self.total_word_count)

    def to_payload(self) -> dict[str, object]:
        return {
            "files": [f.to_payload() for f in self.files],
            "total_word_count": self.total_word_count,
            "total_diagnostics": self.total_diagnostics,
            "density_per_100_words": round(self.density_per_100_words, 4),
        }


def render_text(result: FileResult) -> list[str]:
    """Human-readable lines for one file."""
    report = result.report
    lines = [f"{result.path} ({report.word_count} words, density {report.density_per_100_words:.2f}/100w)"]
    if not report.diagnostics:
        lines.append("  clean")
        return lines
    for d in report.diagnostics:
        lines.append(f"  [{d.category}] {d.location.line}:{d.location.column} {d.message}")
        if d.snippet:
            lines.append(f"      → {d.snippet}")
        if d.suggestion:
            lines.append(f"      suggestion: {d.suggestion}")
    return lines
