# SPDX-License-Identifier: Apache-2.0
"""Deterministic writing guard.

Flags AI-styled prose (puffery, buzzwords, template phrases, weasel claims,
punctuation and structural tics) using phrase lists, compiled regexes and
document heuristics. No LLM calls, no network access.

Usage::

    from writing_guard import Analyzer, load_config

    analyzer = Analyzer(load_config(".dwg.yaml"))
    report = analyzer.analyze(text, analyzer.profile_for_path("docs/intro.md"))
    for diagnostic in report.diagnostics:
        print(diagnostic.category, diagnostic.location.line, diagnostic.message)
"""

from writing_guard.config import Config
from writing_guard.core import Analyzer, analyze_text
from writing_guard.errors import (
    ConfigLoadError,
    PatternCompileError,
    ProfileResolutionError,
    ProfileSelectionError,
    WritingGuardError,
)
from writing_guard.loader import load_config, parse_config
from writing_guard.models import Category, Diagnostic, DocumentReport, Location, Severity

__all__ = [
    "Analyzer",
    "Category",
    "Config",
    "ConfigLoadError",
    "Diagnostic",
    "DocumentReport",
    "Location",
    "PatternCompileError",
    "ProfileResolutionError",
    "ProfileSelectionError",
    "Severity",
    "WritingGuardError",
    "analyze_text",
    "load_config",
    "parse_config",
]
