# Deterministic writing guard: flags AI-styled prose with phrase lists,
# compiled regexes and structural heuristics.
#
# An Analyzer compiles its configuration once (phrase matchers, template
# regexes, profile runtimes) and then analyzes any number of documents.

from __future__ import annotations

import logging
import re

from writing_guard.config import Config
from writing_guard.disabled import DisabledRanges
from writing_guard.errors import ProfileSelectionError
from writing_guard.location import LineIndex
from writing_guard.matchers import PhraseMatcher, compile_user_regexes
from writing_guard.models import DocumentReport
from writing_guard.profiles import DEFAULT_PROFILE, ProfileRuntime, ProfileSelector, build_runtimes
from writing_guard.report import build_report
from writing_guard.rules import PIPELINE, GlobalMatchers, Rule, RuleContext
from writing_guard.segment import count_words, split_lines, split_paragraphs, split_sentences

logger = logging.getLogger(__name__)


class Analyzer:
    """Compiled rules, reusable across documents and threads.

    The configuration is deep-copied at construction and never mutated
    afterwards; every ``analyze`` call owns its own buffers.

    Raises:
        PatternCompileError: a template, profile regex or glob does not compile.
        ProfileResolutionError: profile inheritance is broken.
    """

    def __init__(self, config: Config | None = None, pipeline: list[Rule] | None = None) -> None:
        self._config = (config or Config()).model_copy(deep=True)
        cfg = self._config
        self._allowlist = frozenset(
            p.strip().lower() for p in cfg.whitelist.allowed_phrases + cfg.whitelist.allowed_typos if p.strip()
        )
        self._matchers = GlobalMatchers(
            puffery=PhraseMatcher.build(cfg.puffery.ban),
            weasel=PhraseMatcher.build(cfg.weasel.ban),
            marketing=PhraseMatcher.build(cfg.marketing_cliches.ban),
            buzzwords=PhraseMatcher.build(cfg.buzzwords.throttle),
            transitions=PhraseMatcher.build(cfg.transitions.throttle),
            templates=compile_user_regexes(cfg.templates.ban, re.IGNORECASE | re.MULTILINE),
        )
        self._runtimes: dict[str, ProfileRuntime] = build_runtimes(cfg)
        self._selector = ProfileSelector(cfg.profiles, list(self._runtimes))
        self._pipeline = list(pipeline if pipeline is not None else PIPELINE)
        logger.info(
            f"Analyzer ready: {len(self._runtimes)} profiles, "
            f"{len(self._matchers.templates)} template patterns, {len(self._pipeline)} rules"
        )

    @property
    def config(self) -> Config:
        return self._config

    @property
    def profile_names(self) -> list[str]:
        return list(self._runtimes)

    def default_profile(self) -> str:
        return DEFAULT_PROFILE

    def profile_for_path(self, relative: str, forced: str | None = None) -> str:
        """Profile for a document path; ``forced`` bypasses glob matching."""
        return self._selector.select(relative, forced)

    def runtime(self, profile_name: str) -> ProfileRuntime:
        try:
            return self._runtimes[profile_name]
        except KeyError:
            raise ProfileSelectionError(profile_name, self.profile_names) from None

    def analyze(self, text: str, profile_name: str | None = None) -> DocumentReport:
        """Run every detector over ``text`` under the named profile.

        Args:
            text: The document to lint.
            profile_name: Profile to apply. Defaults to ``default``.

        Returns:
            A report with diagnostics sorted by span start, then category.

        Raises:
            ProfileSelectionError: ``profile_name`` is unknown.
        """
        profile = self.runtime(profile_name or DEFAULT_PROFILE)
        lines = split_lines(text)
        ctx = RuleContext(
            text=text,
            config=self._config,
            profile=profile,
            matchers=self._matchers,
            allowlist=self._allowlist,
            lines=lines,
            sentences=split_sentences(text),
            paragraphs=split_paragraphs(text),
            disabled=DisabledRanges.build(text, lines),
            index=LineIndex(text),
        )
        for rule in self._pipeline:
            try:
                rule(ctx)
            except Exception:
                name = getattr(rule, "__name__", repr(rule))
                logger.exception(f"Rule {name} failed; continuing with the remaining rules")

        report = build_report(count_words(text), ctx.diagnostics, profile.name)
        logger.debug(
            f"Analyzed {report.word_count} words with profile {profile.name!r}: "
            f"{len(report.diagnostics)} diagnostics"
        )
        return report


def analyze_text(text: str, config: Config | None = None, profile_name: str | None = None) -> DocumentReport:
    """One-shot convenience wrapper; build an ``Analyzer`` to lint many documents."""
    return Analyzer(config).analyze(text, profile_name)
