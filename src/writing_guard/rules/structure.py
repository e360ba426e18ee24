"""Detectors for headings, lists, sections and document-wide patterns."""

from __future__ import annotations

import re

from writing_guard.config import HeadingStyle
from writing_guard.models import Category, Severity
from writing_guard.rules.base import Heading, RuleContext, bullet_of, is_structural_sentence
from writing_guard.segment import Line

EMOJI = frozenset(
    "😀😁😂🤣😃😄😅😊😍🤩🤔🚀🌟🔥✨💡✅❗⚡📈🎯"
    "📌👉🔹🔸⭐💪🎉📊🛠🔒📝❌⚠🔑🧠💥🏆📣🙌👀🤝🌍💯"
)
TRIAD_HEADINGS = ("future development", "summary", "conclusion")

_BOLD_ONLY_RE = re.compile(r"^(?:\*\*[^*]+\*\*|__[^_]+__):?$")
_DIRECTIVE_LINE_RE = re.compile(r"^\s*<!--.*dwg:.*-->\s*$")
_SMALL_WORDS = frozenset(
    "a an and as at but by for from if in into nor of on or over per the to via vs with".split()
)


def _line_span(line: Line) -> tuple[int, int]:
    return line.start, line.start + len(line.text)


def _heading_emit(ctx: RuleContext, heading: Heading, category: Category, severity: Severity,
                  message: str, suggestion: str) -> None:
    start, end = _line_span(heading.line)
    ctx.emit(category, severity, start, end, message, suggestion)


def appears_title_case(content: str) -> bool:
    """At least two capitalised words after the first one (acronyms excluded)."""
    capitalised = 0
    for word in content.split()[1:]:
        if word[0].isupper() and not any(c.isupper() for c in word[1:]):
            capitalised += 1
    return capitalised >= 2


def appears_sentence_case(content: str) -> bool:
    """A lowercase word of four or more letters after the first word."""
    for word in content.split()[1:]:
        bare = word.strip("()[],.:;!?\"'")
        if len(bare) >= 4 and bare.isalpha() and bare.islower() and bare not in _SMALL_WORDS:
            return True
    return False


def rule_headings(ctx: RuleContext) -> None:
    rules = ctx.profile.rules
    headings = ctx.headings
    for heading in headings:
        content = heading.content
        if rules.max_heading_depth is not None and heading.level > rules.max_heading_depth:
            _heading_emit(
                ctx, heading, Category.STRUCTURE, Severity.WARNING,
                f"Heading level {heading.level} exceeds maximum depth {rules.max_heading_depth}.",
                "Flatten the outline.",
            )
        if rules.forbid_rhetorical_headings and content.endswith("?"):
            _heading_emit(
                ctx, heading, Category.FORMATTING, Severity.HINT,
                f"Rhetorical heading: `{content}`", "Use a declarative heading.",
            )
        if any(char in EMOJI for char in content):
            _heading_emit(
                ctx, heading, Category.FORMATTING, Severity.HINT,
                f"Emoji found in heading: `{content}`", "Remove emoji from headings.",
            )
        if _BOLD_ONLY_RE.match(content):
            _heading_emit(
                ctx, heading, Category.FORMATTING, Severity.HINT,
                f"Bold markup inside heading: `{content}`", "Headings are already emphasised; drop the bold.",
            )
        if ctx.config.heading_style == HeadingStyle.SENTENCE_CASE and appears_title_case(content):
            _heading_emit(
                ctx, heading, Category.FORMATTING, Severity.HINT,
                f"Heading should be sentence case: `{content}`", "Lowercase the remaining words.",
            )
        elif ctx.config.heading_style == HeadingStyle.TITLE_CASE and appears_sentence_case(content):
            _heading_emit(
                ctx, heading, Category.FORMATTING, Severity.HINT,
                f"Heading should be title case: `{content}`", "Capitalise the principal words.",
            )
        for pattern in ctx.profile.banned_headings:
            if pattern.search(content):
                _heading_emit(
                    ctx, heading, Category.STRUCTURE, Severity.WARNING,
                    f"Banned heading: `{content}`", "Rename or remove this section.",
                )
                break

    for line in ctx.active_lines:
        item = bullet_of(line)
        if item is not None and _BOLD_ONLY_RE.match(item.content):
            start, end = _line_span(line)
            ctx.emit(
                Category.FORMATTING, Severity.HINT, start, end,
                "Bold list item used as a heading",
                "Use a real heading or plain bullet labels instead of bold sentences.",
            )

    if rules.max_headings is not None and len(headings) > rules.max_headings:
        extra = headings[rules.max_headings]
        _heading_emit(
            ctx, extra, Category.STRUCTURE, Severity.WARNING,
            f"Document has {len(headings)} headings; maximum is {rules.max_headings}.",
            "Merge small sections.",
        )

    if ctx.profile.required_headings and ctx.anchor is not None:
        present = {h.content.lower() for h in headings}
        for required in ctx.profile.required_headings:
            if required not in present:
                ctx.emit(
                    Category.STRUCTURE, Severity.WARNING, ctx.anchor, ctx.anchor,
                    f"Missing required heading: `{required}`", "Add the section.",
                    snippet="",
                )


def rule_bullet_items(ctx: RuleContext) -> None:
    limit = ctx.profile.rules.max_bullet_items
    if limit is None:
        return
    for group in ctx.bullet_groups():
        if len(group) > limit:
            start, end = _line_span(group[0].line)
            ctx.emit(
                Category.STRUCTURE, Severity.HINT, start, end,
                f"List has {len(group)} items; maximum is {limit}.",
                "Split the list or turn it into prose.",
            )


def rule_emoji_bullets(ctx: RuleContext) -> None:
    for line in ctx.active_lines:
        item = bullet_of(line)
        if item is None or not item.content.strip():
            continue
        lead = item.content.lstrip()
        if lead[0] in EMOJI:
            offset = item.content_start + (len(item.content) - len(lead))
            ctx.emit(
                Category.FORMATTING, Severity.HINT, offset, offset + 1,
                f"Emoji used as a bullet: `{lead[0]}`", "Drop decorative emoji from lists.",
                snippet=lead[0],
            )


def rule_bold_lead_bullets(ctx: RuleContext) -> None:
    threshold = ctx.config.limits.bold_lead_bullets_per_list
    for group in ctx.bullet_groups(skip=lambda line: _DIRECTIVE_LINE_RE.match(line.text) is not None):
        bold = sum(1 for item in group if item.content.startswith(("**", "__")))
        if bold >= threshold:
            start, end = _line_span(group[0].line)
            ctx.emit(
                Category.FORMATTING, Severity.HINT, start, end,
                f"{bold} bullets open with bold text.",
                "Drop the bold lead-ins or write the list as prose.",
            )


def rule_document_patterns(ctx: RuleContext) -> None:
    anchor = ctx.anchor
    if anchor is not None:
        for pattern in ctx.profile.required_patterns:
            if pattern.search(ctx.text) is None:
                ctx.emit(
                    Category.STRUCTURE, Severity.WARNING, anchor, anchor,
                    f"Required pattern not found: `{pattern.pattern}`", "Add the expected content.",
                    snippet="",
                )
    for pattern in ctx.profile.forbidden_patterns:
        for match in pattern.finditer(ctx.text):
            ctx.emit(
                Category.STRUCTURE, Severity.WARNING, match.start(), match.end(),
                f"Forbidden pattern matched: `{pattern.pattern}`", "Remove or rephrase this text.",
            )


def rule_min_code_blocks(ctx: RuleContext) -> None:
    minimum = ctx.profile.rules.min_code_blocks
    if minimum is None or ctx.anchor is None:
        return
    markers = sum(1 for line in ctx.lines if line.text.lstrip().startswith("```"))
    blocks = (markers + 1) // 2
    if blocks < minimum:
        ctx.emit(
            Category.STRUCTURE, Severity.WARNING, ctx.anchor, ctx.anchor,
            f"Document has {blocks} code blocks; expected at least {minimum}.",
            "Show a concrete example.",
            snippet="",
        )


def rule_triad_slop(ctx: RuleContext) -> None:
    if not ctx.profile.rules.enable_triad_slop:
        return
    found: dict[str, Heading] = {}
    for heading in ctx.headings:
        name = heading.content.lower()
        if name in TRIAD_HEADINGS and name not in found:
            found[name] = heading
    if len(found) >= 2:
        first = min(found.values(), key=lambda h: h.line.start)
        _heading_emit(
            ctx, first, Category.TRIAD_SLOP, Severity.WARNING,
            f"Template section trio: {', '.join(sorted(found))}.",
            "Keep the sections that carry information and drop the rest.",
        )


def rule_section_density(ctx: RuleContext) -> None:
    minimum = ctx.profile.rules.min_sentences_per_section
    if minimum is None:
        return
    headings = ctx.headings
    for position, heading in enumerate(headings):
        body_start = heading.line.start + len(heading.line.text)
        body_end = headings[position + 1].line.start if position + 1 < len(headings) else len(ctx.text)
        count = sum(
            1
            for s in ctx.sentences
            if body_start <= s.start < body_end
            and not is_structural_sentence(s)
            and not ctx.disabled.is_disabled(s.start)
        )
        if count < minimum:
            _heading_emit(
                ctx, heading, Category.SECTION_DENSITY, Severity.HINT,
                f"Section `{heading.content}` has {count} sentences; expected at least {minimum}.",
                "Flesh out the section or merge it into its neighbour.",
            )
