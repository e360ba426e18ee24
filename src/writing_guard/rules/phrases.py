"""Detectors driven by phrase lists and template regexes."""

from __future__ import annotations

from writing_guard.matchers import (
    CONFIDENCE_PERCENT_RE,
    PERCENT_CONTEXT_RE,
    TRI_RANGE_RE,
    PhraseMatcher,
    replacement_for,
)
from writing_guard.models import Category, Severity
from writing_guard.rules.base import RuleContext


def _banned(
    ctx: RuleContext,
    matcher: PhraseMatcher | None,
    category: Category,
    severity: Severity,
    label: str,
    suggestion: str,
    cited_ok: bool = False,
) -> None:
    if matcher is None:
        return
    for start, end in matcher.finditer(ctx.text):
        if cited_ok and ctx.cited(start):
            continue
        snippet = ctx.text[start:end]
        ctx.emit(category, severity, start, end, f"{label}: `{snippet}`", suggestion)


def rule_puffery(ctx: RuleContext) -> None:
    _banned(
        ctx, ctx.matchers.puffery, Category.PUFFERY, Severity.ERROR,
        "Puffery phrase detected", "Replace with a concrete fact.",
    )


def rule_weasel(ctx: RuleContext) -> None:
    _banned(
        ctx, ctx.matchers.weasel, Category.WEASEL, Severity.WARNING,
        "Vague attribution", "Name the specific source or remove.", cited_ok=True,
    )


def rule_marketing(ctx: RuleContext) -> None:
    _banned(
        ctx, ctx.matchers.marketing, Category.MARKETING, Severity.ERROR,
        "Marketing cliché detected", "Swap for factual language.",
    )


def _clustered(
    ctx: RuleContext,
    matcher: PhraseMatcher | None,
    category: Category,
    label: str,
    default_suggestion: str | None,
) -> None:
    """Emit throttled phrases, dropping a lone hit in a sentence that is already specific."""
    if matcher is None:
        return
    groups: dict[object, list[tuple[int, int]]] = {}
    for start, end in matcher.finditer(ctx.text):
        position = ctx.sentence_at(start)
        key = position if position is not None else ("loose", start)
        groups.setdefault(key, []).append((start, end))

    for key, hits in groups.items():
        specific = isinstance(key, int) and ctx.specificity[key]
        if specific and len(hits) == 1:
            continue
        severity = Severity.WARNING if len(hits) >= 2 else Severity.HINT
        for start, end in hits:
            snippet = ctx.text[start:end]
            suggestion = replacement_for(snippet) or default_suggestion
            message = f"{label}: `{snippet}`"
            if len(hits) >= 2:
                message += f" ({len(hits)} in one sentence)"
            ctx.emit(category, severity, start, end, message, suggestion)


def rule_buzzwords(ctx: RuleContext) -> None:
    _clustered(ctx, ctx.matchers.buzzwords, Category.BUZZWORD, "Buzzword detected", None)


def rule_transitions(ctx: RuleContext) -> None:
    _clustered(
        ctx, ctx.matchers.transitions, Category.TRANSITION,
        "Transitional filler detected", "Trim or replace with a simple connector.",
    )


def rule_templates(ctx: RuleContext) -> None:
    for pattern in ctx.matchers.templates + ctx.profile.templates:
        for match in pattern.finditer(ctx.text):
            start, end = match.span()
            if start == end:
                continue
            snippet = match.group(0).strip()
            category = Category.NEGATIVE_PARALLEL if "not" in snippet.lower() else Category.TEMPLATE
            ctx.emit(
                category, Severity.ERROR, start, end,
                f"Template phrasing detected: `{snippet}`", "Rewrite with direct language.",
            )


def rule_ranges(ctx: RuleContext) -> None:
    for match in TRI_RANGE_RE.finditer(ctx.text):
        ctx.emit(
            Category.WEASEL, Severity.WARNING, match.start(), match.end(),
            f"Exaggerated range detected: `{match.group(0).strip()}`",
            "List the specific items or tighten the range.",
        )


def rule_call_to_action(ctx: RuleContext) -> None:
    _banned(
        ctx, ctx.profile.call_to_action, Category.CALL_TO_ACTION, Severity.WARNING,
        "Call to action detected", "Documentation should inform, not sell. Drop the pitch.",
    )


def rule_confidence(ctx: RuleContext) -> None:
    _banned(
        ctx, ctx.profile.confidence, Category.CONFIDENCE, Severity.WARNING,
        "Unsupported confidence claim", "Cite evidence or soften the claim.", cited_ok=True,
    )
    for match in CONFIDENCE_PERCENT_RE.finditer(ctx.text):
        start = match.start()
        if ctx.cited(start) or PERCENT_CONTEXT_RE.match(ctx.text, start):
            continue
        ctx.emit(
            Category.CONFIDENCE, Severity.WARNING, start, match.end(),
            f"Percentage claim without a source: `{match.group(0)}`",
            "Say what was measured and link the measurement.",
        )
