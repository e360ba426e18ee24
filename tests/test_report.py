import pytest

from writing_guard import Category, Config, DocumentReport, Location, Severity
from writing_guard.models import Diagnostic
from writing_guard.report import (
    FileResult,
    RunSummary,
    build_report,
    density,
    exceeds_threshold,
    render_text,
)


def diagnostic(category, start, message="m"):
    return Diagnostic(category, Severity.HINT, message, None, Location(1, start + 1), (start, start + 1), "x")


class TestCategory:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("buzzword", Category.BUZZWORD),
            ("em_dash", Category.EM_DASH),
            ("EMDASH", Category.EM_DASH),
            ("negative-parallel", Category.NEGATIVE_PARALLEL),
            ("cta", Category.CALL_TO_ACTION),
            ("quotes", Category.QUOTE_STYLE),
            ("nonsense", None),
            ("", None),
        ],
    )
    def test_from_name(self, name, expected):
        assert Category.from_name(name) is expected

    def test_ordinals_follow_declaration(self):
        assert Category.PUFFERY.ordinal == 0
        assert Category.SECTION_DENSITY.ordinal == len(Category) - 1


class TestBuildReport:
    def test_sorted_by_start_then_category(self):
        report = build_report(
            10,
            [
                diagnostic(Category.TONE, 5, "first tone"),
                diagnostic(Category.PUFFERY, 5),
                diagnostic(Category.TONE, 5, "second tone"),
                diagnostic(Category.BUZZWORD, 1),
            ],
            "default",
        )
        assert [(d.span[0], d.category, d.message) for d in report.diagnostics] == [
            (1, Category.BUZZWORD, "m"),
            (5, Category.PUFFERY, "m"),
            (5, Category.TONE, "first tone"),
            (5, Category.TONE, "second tone"),
        ]
        assert list(report.category_counts.items()) == [
            (Category.PUFFERY, 1),
            (Category.BUZZWORD, 1),
            (Category.TONE, 2),
        ]

    def test_density(self):
        assert density(3, 0) == 3.0
        assert density(3, 150) == 2.0


class TestThresholds:
    def report(self, diagnostics, words=100):
        return DocumentReport(words, [diagnostic(Category.TONE, n) for n in range(diagnostics)])

    def test_fail_threshold(self):
        scores = Config().scores
        assert exceeds_threshold(self.report(6), scores)
        assert not exceeds_threshold(self.report(5), scores)

    def test_strict_uses_warn_threshold(self):
        scores = Config().scores
        assert not exceeds_threshold(self.report(3), scores)
        assert exceeds_threshold(self.report(3), scores, strict=True)
        assert not exceeds_threshold(self.report(2), scores, strict=True)


class TestRunSummary:
    def test_totals(self):
        files = [
            FileResult("a.md", DocumentReport(50, [diagnostic(Category.TONE, 0)])),
            FileResult("b.md", DocumentReport(150, [diagnostic(Category.TONE, 0)])),
        ]
        payload = RunSummary(files).to_payload()
        assert payload["total_word_count"] == 200
        assert payload["total_diagnostics"] == 2
        assert payload["density_per_100_words"] == 1.0
        assert [f["path"] for f in payload["files"]] == ["a.md", "b.md"]
        assert payload["files"][0]["density_per_100_words"] == 2.0

    def test_empty_run(self):
        assert RunSummary([]).to_payload()["density_per_100_words"] == 0.0

    def test_render_text(self):
        clean = FileResult("a.md", DocumentReport(4, []))
        assert render_text(clean) == ["a.md (4 words, density 0.00/100w)", "  clean"]
        noisy = FileResult("b.md", DocumentReport(10, [diagnostic(Category.TONE, 2, "Too loud")]))
        assert render_text(noisy) == [
            "b.md (10 words, density 10.00/100w)",
            "  [tone] 1:3 Too loud",
            "      → x",
        ]
