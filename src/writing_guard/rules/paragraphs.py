"""Detectors scoped to blank-line separated paragraphs, plus quote style."""

from __future__ import annotations

from writing_guard.config import QuoteStyle
from writing_guard.matchers import BOLD_SPAN_RE, RULE_OF_THREE_RE
from writing_guard.models import Category, Severity
from writing_guard.rules.base import RuleContext
from writing_guard.segment import Paragraph

_CURLY_QUOTES = frozenset("“”‘’")


def _active_positions(ctx: RuleContext, paragraph: Paragraph, char: str) -> list[int]:
    positions = []
    index = paragraph.text.find(char)
    while index >= 0:
        offset = paragraph.start + index
        if not ctx.disabled.is_disabled(offset):
            positions.append(offset)
        index = paragraph.text.find(char, index + 1)
    return positions


def _paragraph_bounds(paragraph: Paragraph) -> tuple[int, int]:
    lead = len(paragraph.text) - len(paragraph.text.lstrip())
    return paragraph.start + lead, paragraph.start + len(paragraph.text.rstrip())


def rule_exclamations(ctx: RuleContext) -> None:
    limit = ctx.profile.rules.max_exclamations_per_paragraph
    if limit is None:
        return
    for paragraph in ctx.paragraphs:
        # ![alt](src) is image syntax, not emphasis
        bangs = [p for p in _active_positions(ctx, paragraph, "!") if ctx.text[p + 1:p + 2] != "["]
        if len(bangs) > limit:
            ctx.emit(
                Category.TONE, Severity.HINT, bangs[0], bangs[0] + 1,
                f"Paragraph has {len(bangs)} exclamation marks; limit is {limit}.",
                "Let the content carry the emphasis.",
                snippet="!",
            )


def rule_rule_of_three(ctx: RuleContext) -> None:
    limit = ctx.config.limits.rule_of_three_per_paragraph
    for paragraph in ctx.paragraphs:
        if not paragraph.text.strip():
            continue
        seen = 0
        for match in RULE_OF_THREE_RE.finditer(paragraph.text):
            start = paragraph.start + match.start()
            if ctx.disabled.is_disabled(start):
                continue
            seen += 1
            if seen > limit:
                ctx.emit(
                    Category.RULE_OF_THREE, Severity.WARNING, start, paragraph.start + match.end(),
                    f"Rule-of-three phrasing detected: `{match.group(0)}`",
                    "Reduce to the single concrete item that matters.",
                )


def rule_em_dashes(ctx: RuleContext) -> None:
    limit = ctx.config.limits.em_dashes_per_paragraph
    for paragraph in ctx.paragraphs:
        dashes = _active_positions(ctx, paragraph, "—")
        if len(dashes) > limit:
            start, end = _paragraph_bounds(paragraph)
            if ctx.disabled.is_disabled(start):
                start = dashes[0]
            ctx.emit(
                Category.EM_DASH, Severity.HINT, start, end,
                f"Paragraph contains {len(dashes)} em dashes; limit is {limit}.",
                "Swap extra em dashes for commas or periods.",
            )


def rule_bold_spans(ctx: RuleContext) -> None:
    limit = ctx.config.limits.bold_spans_per_paragraph
    for paragraph in ctx.paragraphs:
        spans = [
            (paragraph.start + m.start(), paragraph.start + m.end())
            for m in BOLD_SPAN_RE.finditer(paragraph.text)
            if not ctx.disabled.is_disabled(paragraph.start + m.start())
        ]
        if len(spans) > limit:
            start, end = spans[0]
            ctx.emit(
                Category.FORMATTING, Severity.HINT, start, end,
                f"Paragraph has {len(spans)} bold spans; limit is {limit}.",
                "Bold one thing per paragraph at most.",
            )


def rule_quotes(ctx: RuleContext) -> None:
    if ctx.config.quote_style != QuoteStyle.STRAIGHT:
        return
    for offset, char in enumerate(ctx.text):
        if char in _CURLY_QUOTES:
            ctx.emit(
                Category.QUOTE_STYLE, Severity.HINT, offset, offset + 1,
                "Curly quotation detected; prefer straight quotes",
                "Replace with ' or \".",
                snippet=char,
            )
