"""Read a writing-guard configuration from YAML."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from writing_guard.config import Config
from writing_guard.errors import ConfigLoadError

logger = logging.getLogger(__name__)


def parse_config(text: str, source: str = "<string>") -> Config:
    """Validate YAML ``text`` into a :class:`Config`.

    An empty document yields the defaults. Keys that are present replace the
    corresponding defaults wholesale; lists are not appended to.

    Raises:
        ConfigLoadError: the YAML is malformed, is not a mapping, or fails validation.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigLoadError(f"{source}: invalid YAML: {exc}") from exc

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigLoadError(f"{source}: expected a mapping at the top level, got {type(data).__name__}")

    try:
        return Config.model_validate(data)
    except ValidationError as exc:
        raise ConfigLoadError(f"{source}: {exc}") from exc


def load_config(path: str | Path) -> Config:
    """Load ``path``; a missing file means the built-in defaults."""
    path = Path(path)
    if not path.exists():
        logger.info(f"No config at {path}; using built-in defaults")
        return Config()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigLoadError(f"{path}: cannot read: {exc}") from exc
    logger.debug(f"Loading config from {path}")
    return parse_config(text, str(path))
