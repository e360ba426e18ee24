import pytest

from writing_guard.errors import PatternCompileError
from writing_guard.matchers import (
    PhraseMatcher,
    compile_user_regex,
    has_citation,
    has_specificity,
    has_word_boundary,
    replacement_for,
)


def spans(matcher, text):
    return [text[start:end] for start, end in matcher.finditer(text)]


class TestWordBoundary:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("we utilize it", True),
            ("we utilized it", True),
            ("we utilizes it", True),
            ("utilized_internally", False),
            ("reutilize", False),
            ("utilizer", False),
            ("utilize.", True),
        ],
    )
    def test_suffixes(self, text, expected):
        start = text.index("utilize")
        assert has_word_boundary(text, start, start + len("utilize")) is expected


class TestPhraseMatcher:
    def test_case_insensitive(self):
        assert spans(PhraseMatcher(["robust"]), "Robust and ROBUST") == ["Robust", "ROBUST"]

    def test_longest_phrase_wins(self):
        matcher = PhraseMatcher(["delve", "delve into"])
        assert spans(matcher, "we delve into it, then delve") == ["delve into", "delve"]

    def test_retries_after_a_failed_boundary(self):
        assert spans(PhraseMatcher(["ai"]), "paid ai") == ["ai"]

    def test_shorter_phrase_at_the_same_start(self):
        matcher = PhraseMatcher(["journey of", "journey"])
        assert spans(matcher, "Our journey offers little.") == ["journey"]
        assert spans(matcher, "the journey of a lifetime") == ["journey of"]

    def test_suffix_forms_match_the_stem(self):
        assert spans(PhraseMatcher(["leverage"]), "it leverages data") == ["leverage"]

    def test_window(self):
        matcher = PhraseMatcher(["robust"])
        text = "robust. robust."
        assert list(matcher.finditer(text, 5)) == [(8, 14)]
        assert matcher.search(text, 0, 5) is None

    def test_empty_lists(self):
        assert PhraseMatcher.build([]) is None
        assert PhraseMatcher.build(["  ", ""]) is None
        assert not PhraseMatcher([])
        assert list(PhraseMatcher([]).finditer("anything")) == []


class TestUserRegex:
    def test_invalid_regex_raises(self):
        with pytest.raises(PatternCompileError) as excinfo:
            compile_user_regex("(unclosed")
        assert excinfo.value.pattern == "(unclosed"
        assert excinfo.value.kind == "regex"
        assert "(unclosed" in str(excinfo.value)


class TestSignals:
    @pytest.mark.parametrize(
        "text",
        [
            "Upgrade to v2 first.",
            "Edit src/main.py now.",
            "See JIRA-123.",
            "Call parseConfig early.",
            "It takes 30ms.",
            "Set MAX_RETRIES to three.",
            "See Figure 3.",
            "Release 1.4.2 is out.",
            "Fixed in #123.",
            "Read docs/api/auth first.",
            "Run ./build now.",
            "Check /etc/hosts today.",
            "Open config.d/main before editing.",
        ],
    )
    def test_specific(self, text):
        assert has_specificity(text)

    @pytest.mark.parametrize(
        "text",
        [
            "We shipped it.",
            "A robust approach matters.",
            "Ask the team.",
            "Grant read/write access.",
            "Pick client/server or peer-to-peer.",
            "Use one and/or the other.",
        ],
    )
    def test_not_specific(self, text):
        assert not has_specificity(text)

    @pytest.mark.parametrize(
        "text",
        [
            "Results improved [1].",
            "Results improved [2, 3].",
            "Results improved (Smith, 2020).",
            "Results improved (Smith et al., 2020).",
            "See [the report](https://example.com/report).",
            "See doi:10.1000/xyz.",
        ],
    )
    def test_cited(self, text):
        assert has_citation(text)

    @pytest.mark.parametrize("text", ["Results improved [note].", "Results improved (soon)."])
    def test_not_cited(self, text):
        assert not has_citation(text)


class TestReplacements:
    def test_known_phrase(self):
        assert replacement_for("Leverage") == "Try `use`."

    def test_unknown_phrase(self):
        assert replacement_for("tapestry") is None
