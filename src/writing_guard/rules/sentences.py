"""Detectors that work on the shared sentence segmentation."""

from __future__ import annotations

import math
import re

from writing_guard.matchers import CONNECTOR_RE, MID_SENTENCE_QUESTION_RE, PASSIVE_RE
from writing_guard.models import Category, Severity
from writing_guard.rules.base import RuleContext

_FIRST_WORD_RE = re.compile(r"[^\W_]+")
_NORMALIZE_RE = re.compile(r"[^a-z0-9 ]+")

_REPETITION_MIN_CHARS = 12
_UNIFORM_MIN_SENTENCES = 5
_UNIFORM_MIN_SAMPLES = 8
_UNIFORM_CV_THRESHOLD = 0.20
_PASSIVE_MIN_SENTENCES = 6
_PASSIVE_RATIO_THRESHOLD = 0.50
_BIGRAM_MIN_SENTENCES = 4
_BIGRAM_SHARE_THRESHOLD = 0.40


def rule_connector_glut(ctx: RuleContext) -> None:
    limit = ctx.config.limits.connectors_per_sentence
    for sentence in ctx.sentences:
        count = len(CONNECTOR_RE.findall(sentence.text))
        if count > limit:
            ctx.emit(
                Category.CONNECTOR_GLUT, Severity.WARNING, sentence.start, sentence.end,
                f"Sentence uses {count} connectors; limit is {limit}.",
                "Split the sentence or drop extra connectors.",
                snippet=sentence.text,
            )


def rule_sentence_length(ctx: RuleContext) -> None:
    limit = ctx.profile.rules.max_sentence_length
    if limit is None:
        return
    for sentence in ctx.sentences:
        if sentence.text.startswith("#"):
            continue
        length = len(sentence.text.split())
        if length > limit:
            ctx.emit(
                Category.SENTENCE_LENGTH, Severity.HINT, sentence.start, sentence.end,
                f"Sentence has {length} words; limit is {limit}.",
                "Split it into shorter sentences.",
                snippet=sentence.text,
            )


def rule_question_lead(ctx: RuleContext) -> None:
    """Flag documents that open with a run of rhetorical questions."""
    limit = ctx.profile.rules.question_lead_limit
    if limit is None:
        return
    run = []
    for sentence in ctx.prose_sentences:
        if not sentence.text.endswith("?"):
            break
        run.append(sentence)
    if len(run) > limit:
        first = run[0]
        ctx.emit(
            Category.TONE, Severity.HINT, first.start, first.end,
            f"Document opens with {len(run)} questions in a row.",
            "Lead with the answer instead of rhetorical questions.",
            snippet=first.text,
        )


def rule_mid_sentence_question(ctx: RuleContext) -> None:
    for match in MID_SENTENCE_QUESTION_RE.finditer(ctx.text):
        ctx.emit(
            Category.TONE, Severity.HINT, match.start(), match.start() + 1,
            "Question mark in the middle of a sentence.",
            "State the point instead of posing and answering a question.",
            snippet="?",
        )


def _first_word(text: str) -> str:
    match = _FIRST_WORD_RE.search(text)
    return match.group(0).lower() if match else ""


def rule_cadence(ctx: RuleContext) -> None:
    starts = ctx.profile.cadence_starts
    limit = ctx.profile.rules.cadence_limit
    if not starts or limit is None:
        return
    streak = 0
    for sentence in ctx.prose_sentences:
        word = _first_word(sentence.text)
        if word not in starts:
            streak = 0
            continue
        streak += 1
        if streak == limit + 1:
            ctx.emit(
                Category.CADENCE, Severity.HINT, sentence.start, sentence.end,
                f"{streak} consecutive sentences open with a stock connector (`{word}`).",
                "Vary sentence openings or drop the connector.",
                snippet=sentence.text,
            )


def rule_broad_terms(ctx: RuleContext) -> None:
    matcher = ctx.profile.broad_terms
    if matcher is None:
        return
    for position, sentence in enumerate(ctx.sentences):
        if not sentence.text or sentence.text.startswith("#") or ctx.specificity[position]:
            continue
        hit = matcher.search(ctx.text, sentence.start, sentence.end)
        if hit is None:
            continue
        start, end = hit
        ctx.emit(
            Category.BROAD_TERM, Severity.HINT, start, end,
            f"Broad term without specifics: `{ctx.text[start:end]}`",
            "Name the actual items, people or numbers.",
        )


def _normalize(text: str) -> str:
    return " ".join(_NORMALIZE_RE.sub(" ", text.lower()).split())


def rule_repetition(ctx: RuleContext) -> None:
    limit = ctx.profile.rules.max_duplicate_sentences
    if limit is None:
        return
    seen: dict[str, int] = {}
    for sentence in ctx.sentences:
        if ctx.disabled.is_disabled(sentence.start):
            continue
        key = _normalize(sentence.text)
        seen[key] = seen.get(key, 0) + 1
        occurrence = seen[key]
        if occurrence > 1 and len(key) >= _REPETITION_MIN_CHARS and occurrence > limit:
            ctx.emit(
                Category.REPETITION, Severity.WARNING, sentence.start, sentence.end,
                f"Sentence repeated {occurrence} times.",
                "Remove the duplicate or say something new.",
                snippet=sentence.text,
            )


def rule_statistical_slop(ctx: RuleContext) -> None:
    """Document-level rhythm metrics; each fires at most once."""
    sentences = ctx.prose_sentences
    if len(sentences) < _UNIFORM_MIN_SENTENCES:
        return
    first = sentences[0]

    lengths = [len(s.text.split()) for s in sentences]
    if len(lengths) >= _UNIFORM_MIN_SAMPLES:
        mean = sum(lengths) / len(lengths)
        if mean > 0:
            variance = sum((x - mean) ** 2 for x in lengths) / len(lengths)
            cv = math.sqrt(variance) / mean
            if cv < _UNIFORM_CV_THRESHOLD:
                ctx.emit(
                    Category.TONE, Severity.WARNING, first.start, first.end,
                    f"Sentence lengths are suspiciously uniform (CV={cv:.2f} across {len(lengths)} sentences).",
                    "Vary short and long sentences.",
                    snippet=first.text,
                )

    if len(sentences) >= _PASSIVE_MIN_SENTENCES:
        passive = sum(1 for s in sentences if PASSIVE_RE.search(s.text))
        ratio = passive / len(sentences)
        if ratio > _PASSIVE_RATIO_THRESHOLD:
            ctx.emit(
                Category.TONE, Severity.HINT, first.start, first.end,
                f"{passive} of {len(sentences)} sentences use the passive voice.",
                "Name who does what.",
                snippet=first.text,
            )

    openings: dict[str, list[int]] = {}
    total = 0
    for position, sentence in enumerate(sentences):
        tokens = [t.lower() for t in _FIRST_WORD_RE.findall(sentence.text)[:2]]
        if len(tokens) < 2:
            continue
        total += 1
        openings.setdefault(" ".join(tokens), []).append(position)
    if total >= _BIGRAM_MIN_SENTENCES and openings:
        bigram, positions = max(openings.items(), key=lambda item: (len(item[1]), -item[1][0]))
        share = len(positions) / total
        if share > _BIGRAM_SHARE_THRESHOLD:
            anchor = sentences[positions[0]]
            ctx.emit(
                Category.CADENCE, Severity.HINT, anchor.start, anchor.end,
                f"{len(positions)} of {total} sentences open with `{bigram}`.",
                "Vary how sentences begin.",
                snippet=anchor.text,
            )

