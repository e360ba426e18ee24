"""``writing-guard`` command: lint Markdown and text files from the shell."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from writing_guard.core import Analyzer
from writing_guard.errors import WritingGuardError
from writing_guard.loader import load_config
from writing_guard.report import FileResult, RunSummary, exceeds_threshold, render_text

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "writing-guard.yml"
SUPPORTED_SUFFIXES = frozenset({".md", ".markdown", ".mdx", ".txt", ".rst"})

EXIT_OK = 0
EXIT_THRESHOLD = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="writing-guard",
        description="Flag AI-styled prose in Markdown and text files.",
    )
    parser.add_argument("paths", nargs="*", default=["."], metavar="PATH", help="Files or directories to lint")
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help=f"YAML config file (default: {DEFAULT_CONFIG}, if present)"
    )
    parser.add_argument("--profile", default=None, help="Apply this profile to every file instead of glob matching")
    parser.add_argument("--json", action="store_true", help="Print a JSON report")
    parser.add_argument(
        "--strict", action="store_true", help="Exit non-zero when any file reaches the warn threshold"
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress human-readable output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def is_supported(path: Path) -> bool:
    return path.suffix.lower() in SUPPORTED_SUFFIXES


def collect_files(paths: list[str]) -> list[Path]:
    """Expand directories recursively; keep supported files only, sorted."""
    files: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            files.extend(p for p in path.rglob("*") if p.is_file() and is_supported(p))
        elif path.is_file() and is_supported(path):
            files.append(path)
        elif not path.exists():
            logger.warning(f"Skipping {raw}: no such file or directory")
    return sorted(set(files))


def relative_path(path: Path) -> str:
    """Path relative to the working directory, for profile glob matching."""
    try:
        return Path(os.path.relpath(path)).as_posix()
    except ValueError:
        return path.as_posix()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        analyzer = Analyzer(config)
        files = collect_files(args.paths)
        results: list[FileResult] = []
        failed = False
        for path in files:
            display = relative_path(path)
            profile = analyzer.profile_for_path(display, args.profile)
            logger.info(f"Linting {display} with profile {profile!r}")
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise WritingGuardError(f"{display}: cannot read: {exc}") from exc
            report = analyzer.analyze(text, profile)
            result = FileResult(display, report)
            results.append(result)
            if not args.quiet and not args.json:
                print("\n".join(render_text(result)))
            failed = failed or exceeds_threshold(report, config.scores, args.strict)
    except WritingGuardError as exc:
        print(f"writing-guard: {exc}", file=sys.stderr)
        return EXIT_CONFIG

    summary = RunSummary(results)
    if args.json:
        print(json.dumps(summary.to_payload(), indent=2, ensure_ascii=False))
    elif not args.quiet:
        print(
            f"\n{summary.total_word_count} words, {summary.total_diagnostics} diagnostics, "
            f"density {summary.density_per_100_words:.2f} per 100 words"
        )
    return EXIT_THRESHOLD if failed else EXIT_OK
