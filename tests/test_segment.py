import random
import string

import pytest

from writing_guard.location import LineIndex
from writing_guard.segment import (
    count_words,
    numbered_marker_length,
    split_lines,
    split_paragraphs,
    split_sentences,
)


def texts(sentences):
    return [s.text for s in sentences]


class TestSplitSentences:
    def test_terminators(self):
        assert texts(split_sentences("One. Two? Three!")) == ["One.", "Two?", "Three!"]

    def test_terminator_needs_following_whitespace(self):
        assert texts(split_sentences("Version 1.2 is out. See e.g.the notes")) == [
            "Version 1.2 is out.",
            "See e.g.the notes",
        ]

    def test_soft_wrapped_line_stays_one_sentence(self):
        assert texts(split_sentences("This sentence wraps\nonto a second line.")) == [
            "This sentence wraps\nonto a second line."
        ]

    def test_markdown_lines_close_sentences(self):
        text = "# Title\nIntro without a stop\n- first item\n- second item\n1. numbered\n2) other"
        assert texts(split_sentences(text)) == [
            "# Title",
            "Intro without a stop",
            "- first item",
            "- second item",
            "1. numbered",
            "2) other",
        ]

    def test_list_marker_period_does_not_close(self):
        assert texts(split_sentences("1. Install it. Then run it.")) == ["1. Install it.", "Then run it."]

    def test_blank_line_closes(self):
        assert texts(split_sentences("No terminator\n\nNext one.")) == ["No terminator", "Next one."]

    def test_offsets_index_the_original_text(self):
        text = "  Leading space.\n\nSecond  one?  Third"
        for sentence in split_sentences(text):
            assert text[sentence.start:sentence.end] == sentence.text

    def test_empty_and_blank(self):
        assert split_sentences("") == []
        assert split_sentences(" \n\t ") == []

    @pytest.mark.parametrize("seed", range(25))
    def test_fuzz_reconstructs_text(self, seed):
        rng = random.Random(seed)
        alphabet = string.ascii_letters + string.digits + "      ..!?\n\n#-*)"
        text = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 400)))
        sentences = split_sentences(text)
        cursor = 0
        rebuilt = []
        for sentence in sentences:
            assert sentence.start >= cursor
            gap = text[cursor:sentence.start]
            assert gap.strip() == ""
            assert sentence.text == sentence.text.strip() != ""
            rebuilt.append(gap + sentence.text)
            cursor = sentence.end
        assert text[cursor:].strip() == ""
        assert "".join(rebuilt) == text[:cursor]


class TestMarkers:
    @pytest.mark.parametrize(
        "text, expected",
        [("1. item", 3), ("12) item", 4), ("3.\titem", 3), ("1.x", 2), ("1", 0), ("x. item", 0), ("", 0)],
    )
    def test_numbered_marker_length(self, text, expected):
        assert numbered_marker_length(text) == expected


class TestParagraphsAndLines:
    def test_paragraphs_split_on_blank_line(self):
        assert split_paragraphs("a\nb\n\nc") == [("a\nb", 0), ("c", 5)]

    def test_crlf_blank_line_is_not_a_paragraph_break(self):
        assert len(split_paragraphs("a\r\n\r\nb")) == 1

    def test_empty_document_is_one_paragraph(self):
        assert split_paragraphs("") == [("", 0)]

    def test_lines(self):
        lines = split_lines("ab\n\ncd")
        assert [(l.number, l.text, l.start) for l in lines] == [(1, "ab", 0), (2, "", 3), (3, "cd", 4)]


class TestCountWords:
    def test_tokens_need_a_letter(self):
        assert count_words("Hello, world! 42 -- ok") == 3

    def test_empty(self):
        assert count_words("") == 0


class TestLineIndex:
    def test_location_is_one_based(self):
        index = LineIndex("ab\ncd")
        assert (index.location(0).line, index.location(0).column) == (1, 1)
        assert (index.location(4).line, index.location(4).column) == (2, 2)

    def test_byte_offsets_follow_utf8(self):
        text = "héllo\nwörld"
        index = LineIndex(text)
        assert index.byte_offset(2) == 3
        assert index.byte_offset(7) == 8
        assert index.byte_offset(8) == 10
        assert index.byte_offset(len(text)) == len(text.encode("utf-8"))
