from __future__ import annotations


class WritingGuardError(Exception):
    """Base class for every error raised by writing_guard."""


class ConfigLoadError(WritingGuardError):
    """The configuration file could not be read, parsed or validated."""


class PatternCompileError(WritingGuardError):
    """A user-supplied regex or glob failed to compile."""

    def __init__(self, pattern: str, reason: str, kind: str = "regex") -> None:
        self.pattern = pattern
        self.reason = reason
        self.kind = kind
        super().__init__(f"invalid {kind} `{pattern}`: {reason}")


class ProfileResolutionError(WritingGuardError):
    """Profile inheritance is broken: unknown parent, cycle or bad name."""


class ProfileSelectionError(WritingGuardError):
    """An analysis asked for a profile that does not exist."""

    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        self.known = known
        super().__init__(f"unknown profile `{name}` (known: {', '.join(known)})")
