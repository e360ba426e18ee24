"""Profile inheritance, compilation and path-based selection.

A profile's recipe is its parent's recipe (``default`` when no parent is
named) merged with its own rules. Recipes are resolved and compiled once, when
the analyzer is built; analyses only look runtimes up by name.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from writing_guard.config import Config, ProfileConfig, ProfileRules
from writing_guard.errors import PatternCompileError, ProfileResolutionError, ProfileSelectionError
from writing_guard.matchers import PhraseMatcher, compile_user_regexes

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"

SCALAR_FIELDS: tuple[str, ...] = (
    "max_headings",
    "max_sentence_length",
    "max_duplicate_sentences",
    "cadence_limit",
    "max_heading_depth",
    "max_bullet_items",
    "max_exclamations_per_paragraph",
    "question_lead_limit",
    "min_sentences_per_section",
    "min_code_blocks",
)
LIST_FIELDS: tuple[str, ...] = (
    "required_headings",
    "banned_heading_regexes",
    "call_to_action_phrases",
    "template_phrases",
    "cadence_starts",
    "broad_terms",
    "confidence_phrases",
    "required_patterns",
    "forbidden_patterns",
)
FLAG_FIELDS: tuple[str, ...] = ("forbid_rhetorical_headings", "enable_triad_slop")


def merge_rules(base: ProfileRules, overlay: ProfileRules) -> ProfileRules:
    """Overwrite set scalars, append lists, OR flags."""
    updates: dict[str, object] = {}
    for name in SCALAR_FIELDS:
        value = getattr(overlay, name)
        if value is not None:
            updates[name] = value
    for name in LIST_FIELDS:
        updates[name] = list(getattr(base, name)) + list(getattr(overlay, name))
    for name in FLAG_FIELDS:
        updates[name] = getattr(base, name) or getattr(overlay, name)
    return base.model_copy(update=updates, deep=True)


@dataclass(frozen=True)
class ProfileRecipe:
    name: str
    rules: ProfileRules


def resolve_recipes(config: Config) -> dict[str, ProfileRecipe]:
    """Resolve every profile of ``config`` into a recipe, keyed by name.

    Raises:
        ProfileResolutionError: empty or duplicate names, a profile named
            ``default``, an unknown ``extends`` target, or a cycle.
    """
    by_name: dict[str, ProfileConfig] = {}
    for profile in config.profiles:
        name = profile.name.strip()
        if not name:
            raise ProfileResolutionError("profile name must not be empty")
        if name == DEFAULT_PROFILE:
            raise ProfileResolutionError(
                f"profile name `{DEFAULT_PROFILE}` is reserved; use profile_defaults instead"
            )
        if name in by_name:
            raise ProfileResolutionError(f"duplicate profile `{name}`")
        by_name[name] = profile

    recipes = {DEFAULT_PROFILE: ProfileRecipe(DEFAULT_PROFILE, config.profile_defaults.model_copy(deep=True))}

    def resolve(name: str, chain: tuple[str, ...]) -> ProfileRecipe:
        if name in recipes:
            return recipes[name]
        if name in chain:
            cycle = " -> ".join(chain[chain.index(name):] + (name,))
            raise ProfileResolutionError(f"profile inheritance cycle: {cycle}")
        profile = by_name[name]
        parent_name = (profile.extends or DEFAULT_PROFILE).strip()
        if parent_name != DEFAULT_PROFILE and parent_name not in by_name:
            raise ProfileResolutionError(f"profile `{name}` extends unknown profile `{parent_name}`")
        parent = resolve(parent_name, chain + (name,))
        recipe = ProfileRecipe(name, merge_rules(parent.rules, profile.rules))
        recipes[name] = recipe
        logger.debug(f"Resolved profile {name!r} (extends {parent_name!r})")
        return recipe

    for name in by_name:
        resolve(name, ())
    return recipes


@dataclass
class ProfileRuntime:
    """A recipe plus the compiled matchers its detectors need."""

    name: str
    rules: ProfileRules
    call_to_action: PhraseMatcher | None = None
    confidence: PhraseMatcher | None = None
    broad_terms: PhraseMatcher | None = None
    cadence_starts: frozenset[str] = field(default_factory=frozenset)
    required_headings: tuple[str, ...] = ()
    templates: tuple[re.Pattern[str], ...] = ()
    banned_headings: tuple[re.Pattern[str], ...] = ()
    required_patterns: tuple[re.Pattern[str], ...] = ()
    forbidden_patterns: tuple[re.Pattern[str], ...] = ()

    @classmethod
    def compile(cls, recipe: ProfileRecipe) -> ProfileRuntime:
        rules = recipe.rules
        return cls(
            name=recipe.name,
            rules=rules,
            call_to_action=PhraseMatcher.build(rules.call_to_action_phrases),
            confidence=PhraseMatcher.build(rules.confidence_phrases),
            broad_terms=PhraseMatcher.build(rules.broad_terms),
            cadence_starts=frozenset(w.strip().lower() for w in rules.cadence_starts if w.strip()),
            required_headings=tuple(h.strip().lower() for h in rules.required_headings if h.strip()),
            templates=compile_user_regexes(rules.template_phrases, re.IGNORECASE | re.MULTILINE),
            banned_headings=compile_user_regexes(rules.banned_heading_regexes, re.IGNORECASE),
            required_patterns=compile_user_regexes(rules.required_patterns, re.MULTILINE),
            forbidden_patterns=compile_user_regexes(rules.forbidden_patterns, re.MULTILINE),
        )


def build_runtimes(config: Config) -> dict[str, ProfileRuntime]:
    return {name: ProfileRuntime.compile(recipe) for name, recipe in resolve_recipes(config).items()}


# ---------------------------------------------------------------------------
# Glob selection
# ---------------------------------------------------------------------------


def glob_to_regex(glob: str) -> re.Pattern[str]:
    """Translate a glob into an anchored regex.

    ``*`` and ``?`` cross directory separators, ``**/`` matches zero or more
    directories, ``[...]`` is a character class.
    """
    parts: list[str] = []
    index = 0
    length = len(glob)
    while index < length:
        char = glob[index]
        if glob.startswith("**/", index):
            parts.append("(?:.*/)?")
            index += 3
        elif char == "*":
            while index < length and glob[index] == "*":
                index += 1
            parts.append(".*")
        elif char == "?":
            parts.append(".")
            index += 1
        elif char == "[":
            closing = glob.find("]", index + 2 if glob.startswith("[!", index) or glob.startswith("[]", index) else index + 1)
            if closing < 0:
                raise PatternCompileError(glob, "unterminated character class", kind="glob")
            body = glob[index + 1:closing].replace("\\", "\\\\")
            if body.startswith("!"):
                body = "^" + body[1:]
            parts.append(f"[{body}]")
            index = closing + 1
        else:
            parts.append(re.escape(char))
            index += 1
    try:
        return re.compile("".join(parts) + r"\Z", re.DOTALL)
    except re.error as exc:
        raise PatternCompileError(glob, str(exc), kind="glob") from exc


def normalize_path(path: str) -> str:
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


class ProfileSelector:
    """Picks a profile for a document path: the first profile whose globs match."""

    def __init__(self, profiles: list[ProfileConfig], known: list[str]) -> None:
        self._known = list(known)
        self._matchers: list[tuple[str, tuple[re.Pattern[str], ...]]] = [
            (profile.name.strip(), tuple(glob_to_regex(g) for g in profile.globs if g.strip()))
            for profile in profiles
        ]

    def select(self, path: str, forced: str | None = None) -> str:
        if forced is not None:
            if forced not in self._known:
                raise ProfileSelectionError(forced, self._known)
            return forced
        candidate = normalize_path(path)
        for name, globs in self._matchers:
            if any(glob.match(candidate) for glob in globs):
                return name
        return DEFAULT_PROFILE
