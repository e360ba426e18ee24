from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class HeadingStyle(str, Enum):
    ANY = "any"
    SENTENCE_CASE = "sentence-case"
    TITLE_CASE = "title-case"


class QuoteStyle(str, Enum):
    ANY = "any"
    STRAIGHT = "straight"


class _Model(BaseModel):
    model_config = ConfigDict(extra="forbid", use_enum_values=False)


class Limits(_Model):
    """Hard limits for stylistic constructs per sentence, paragraph or list."""

    em_dashes_per_paragraph: int = Field(default=1, ge=0, description="Em dashes allowed in one paragraph")
    connectors_per_sentence: int = Field(default=1, ge=0, description="Connectors allowed in one sentence")
    rule_of_three_per_paragraph: int = Field(default=0, ge=0, description="'X, Y, and Z' lists allowed per paragraph")
    bold_spans_per_paragraph: int = Field(default=3, ge=0, description="Bold spans allowed in one paragraph")
    bold_lead_bullets_per_list: int = Field(default=3, ge=1, description="Bold-led bullets that trigger a hint")


class ScoreThresholds(_Model):
    """Density thresholds expressed as diagnostics per 100 words."""

    warn_threshold_per_100w: float = Field(default=3, ge=0)
    fail_threshold_per_100w: float = Field(default=6, ge=0)


class Whitelist(_Model):
    allowed_typos: list[str] = Field(default_factory=lambda: ["detmerinsitc", "analye", "parallesl"])
    allowed_phrases: list[str] = Field(default_factory=lambda: ["and then", "just ship it", "we move on"])


class PhraseList(_Model):
    ban: list[str] = Field(default_factory=list)


class ThrottleList(_Model):
    throttle: list[str] = Field(default_factory=list)


class ProfileRules(_Model):
    """Every tunable a profile may set.

    Scalars left as ``None`` are "not set" and inherit from the parent profile.
    Lists are appended to the parent's lists, flags are OR-ed with the parent's.
    """

    max_headings: Optional[int] = Field(default=None, ge=0)
    required_headings: list[str] = Field(default_factory=list)
    banned_heading_regexes: list[str] = Field(default_factory=list)
    call_to_action_phrases: list[str] = Field(default_factory=list)
    template_phrases: list[str] = Field(default_factory=list, description="Extra template regexes")
    max_sentence_length: Optional[int] = Field(default=None, ge=1, description="Words per sentence")
    max_duplicate_sentences: Optional[int] = Field(default=None, ge=1)
    cadence_starts: list[str] = Field(default_factory=list)
    cadence_limit: Optional[int] = Field(default=None, ge=0)
    broad_terms: list[str] = Field(default_factory=list)
    confidence_phrases: list[str] = Field(default_factory=list)
    max_heading_depth: Optional[int] = Field(default=None, ge=1, le=6)
    max_bullet_items: Optional[int] = Field(default=None, ge=1)
    forbid_rhetorical_headings: bool = False
    required_patterns: list[str] = Field(default_factory=list)
    forbidden_patterns: list[str] = Field(default_factory=list)
    max_exclamations_per_paragraph: Optional[int] = Field(default=None, ge=0)
    question_lead_limit: Optional[int] = Field(default=None, ge=0)
    min_sentences_per_section: Optional[int] = Field(default=None, ge=0)
    min_code_blocks: Optional[int] = Field(default=None, ge=0)
    enable_triad_slop: bool = False


class ProfileConfig(_Model):
    name: str
    globs: list[str] = Field(default_factory=list)
    extends: Optional[str] = None
    rules: ProfileRules = Field(default_factory=ProfileRules)


def _default_profile_rules() -> ProfileRules:
    return ProfileRules(
        call_to_action_phrases=[
            "sign up today", "get started today", "don't miss out", "contact us today",
            "join us today", "try it free", "book a demo", "subscribe now", "act now",
        ],
        max_sentence_length=45,
        max_duplicate_sentences=1,
        cadence_starts=[
            "additionally", "furthermore", "moreover", "however", "overall", "ultimately",
            "importantly", "notably", "indeed", "crucially", "interestingly",
        ],
        cadence_limit=2,
        broad_terms=[
            "various", "numerous", "a wide range of", "a variety of", "stakeholders",
            "many aspects", "key areas", "in many ways", "countless", "myriad",
        ],
        confidence_phrases=[
            "guaranteed", "without a doubt", "undeniably", "always works", "proven to",
            "it is clear that", "there is no doubt", "unquestionably", "never fails",
        ],
        max_heading_depth=4,
        max_bullet_items=10,
        max_exclamations_per_paragraph=2,
        question_lead_limit=2,
    )


_DEFAULT_BUZZWORDS = [
    "delve", "delve into", "deep dive", "leverage", "utilise", "utilize", "facilitate",
    "optimise", "optimize", "embark", "embark on a journey", "underscore", "aims to explore",
    "aligns", "pivotal", "vital", "robust", "innovative", "seamless", "exemplary",
    "ever-evolving", "multifaceted", "groundbreaking", "holistic", "dynamic",
    "paradigm-shifting", "landscape", "realm", "tapestry", "efficiency", "transformation",
    "synergy", "paradigm", "roadmap", "ecosystem", "journey", "bandwidth", "stakeholder",
    "best practices", "strategic implementation", "deliverables", "adoption rate",
    "capacity building", "kpi", "proof of concept", "cutting-edge", "game-changing",
    "next-generation", "revolutionary", "state-of-the-art", "ai-powered", "robustly",
    "seamlessly", "significantly", "notably", "fundamentally", "inherently",
    "transformative", "journey of", "unprecedented", "plethora", "empower",
]

_DEFAULT_TRANSITIONS = [
    "furthermore", "moreover", "consequently", "thus", "accordingly", "nonetheless",
    "subsequently", "therefore", "at the same time", "to that end", "in addition to",
    "alongside this", "as a result", "in fact", "in essence", "in summary",
    "significantly", "remarkably", "notably",
]

_DEFAULT_PUFFERY = [
    "rich cultural heritage", "vibrant cultural heritage", "cultural tapestry",
    "breathtaking", "must-visit", "must-see", "stunning natural beauty", "enduring legacy",
    "lasting legacy", "nestled", "in the heart of", "stands as a symbol of",
    "stands as a testament", "plays a pivotal role in", "leaves a lasting impact",
    "hallmark of innovation", "gateway to", "thriving ecosystem", "vibrant ecosystem",
    "groundbreaking innovation", "unparalleled excellence", "a seamless journey",
    "a diverse tapestry",
]

_DEFAULT_TEMPLATES = [
    r"^in conclusion",
    r"^overall",
    r"^in summary",
    r"^in essence",
    r"^future prospects include",
    r"^in today’s fast-paced world",
    r"^in today's fast-paced world",
    r"^in today’s ever-evolving world",
    r"^in today's ever-evolving world",
    r"\bit is worth noting\b",
    r"\bit is important to note\b",
    r"\bit should be mentioned\b",
    r"\bit is worth considering\b",
    r"\bone might argue\b",
    r"\bone could contend\b",
    r"\bbased on the information provided\b",
    r"\baccording to the data\b",
    r"\bevidently, this suggests\b",
    r"\bnot (?:just|only)\b.+\bbut (?:also|rather)\b",
    r"\bno [^,.;]+, no [^,.;]+, just [^,.;]+",
    r"\bplay(?:s)? a significant role in shaping\b",
    r"\baims to explore\b",
    r"\btoday’s fast-paced world\b",
    r"\btoday's fast-paced world\b",
    r"\bas an ai language model\b",
    r"\bas a large language model\b",
    r"\bi hope this helps\b",
    r"\blet(?:'|’)s dive in\b",
]

_DEFAULT_WEASELS = [
    "some critics argue", "experts say", "observers noted", "industry reports show",
    "it should be mentioned that", "it is worth considering that", "it could be suggested that",
    "many believe", "studies show", "research suggests", "it is widely believed",
]

_DEFAULT_MARKETING = [
    "unlock the power of", "revolutionise the way", "revolutionize the way",
    "take your business to the next level", "game-changing solution", "unparalleled excellence",
    "cutting-edge technology", "seamlessly integrated", "state-of-the-art",
    "disruptive innovation", "next-generation",
]


class Config(_Model):
    """Top-level analyzer configuration, usually loaded from YAML.

    Attributes:
        heading_style: Capitalisation policy enforced on Markdown headings.
        quote_style: ``straight`` flags every curly quotation mark.
        limits: Per-sentence, per-paragraph and per-list numeric limits.
        scores: Warn and fail density thresholds used by the driver.
        whitelist: Snippets that must never be reported.
        buzzwords: Throttled buzzwords, subject to cluster suppression.
        transitions: Throttled transitional filler, subject to cluster suppression.
        puffery: Banned puffery phrases.
        templates: Banned template regexes (case-insensitive, ``^`` anchors lines).
        weasel: Banned vague attributions.
        marketing_cliches: Banned marketing phrases.
        profile_defaults: Rules of the ``default`` profile, inherited by every root.
        profiles: Named profiles selected by glob or by name.
    """

    heading_style: HeadingStyle = HeadingStyle.SENTENCE_CASE
    quote_style: QuoteStyle = QuoteStyle.STRAIGHT
    limits: Limits = Field(default_factory=Limits)
    scores: ScoreThresholds = Field(default_factory=ScoreThresholds)
    whitelist: Whitelist = Field(default_factory=Whitelist)
    buzzwords: ThrottleList = Field(default_factory=lambda: ThrottleList(throttle=list(_DEFAULT_BUZZWORDS)))
    transitions: ThrottleList = Field(default_factory=lambda: ThrottleList(throttle=list(_DEFAULT_TRANSITIONS)))
    puffery: PhraseList = Field(default_factory=lambda: PhraseList(ban=list(_DEFAULT_PUFFERY)))
    templates: PhraseList = Field(default_factory=lambda: PhraseList(ban=list(_DEFAULT_TEMPLATES)))
    weasel: PhraseList = Field(default_factory=lambda: PhraseList(ban=list(_DEFAULT_WEASELS)))
    marketing_cliches: PhraseList = Field(default_factory=lambda: PhraseList(ban=list(_DEFAULT_MARKETING)))
    profile_defaults: ProfileRules = Field(default_factory=_default_profile_rules)
    profiles: list[ProfileConfig] = Field(default_factory=list)
