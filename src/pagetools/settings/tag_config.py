"""Tag configuration loader — read the JSON tag configuration from disk.

The file location comes from ``tagging.config_path`` in settings, normally
set through ``PAGETOOLS_TAGGING__CONFIG_PATH``.  Every failure mode (unset
path, missing file, malformed JSON, wrong field types) is surfaced as a
``ConfigurationError``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from pagetools.exceptions import ConfigurationError
from pagetools.models.tagging import TagConfig

if TYPE_CHECKING:
    from pagetools.settings.config import Settings

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV_VAR = "PAGETOOLS_TAGGING__CONFIG_PATH"


def load_tag_config(path: Path | str) -> TagConfig:
    """Load and validate a tag configuration file.

    Args:
        path: Path to the JSON file.

    Returns:
        A validated, frozen ``TagConfig``.

    Raises:
        ConfigurationError: If the file is missing, is not valid JSON, or
            does not conform to the schema.
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigurationError(f"Tag config file not found: {config_path}")

    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read tag config file {config_path}: {exc}") from exc

    try:
        config = TagConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid tag config in {config_path}: {exc}") from exc

    logger.debug(
        "Loaded tag config from %s (%d excluded selectors, %d icon keywords, %d special tags)",
        config_path,
        len(config.excluded_selectors),
        len(config.icon_class_keywords),
        len(config.special_tag_names),
    )
    return config


def load_tag_config_from_settings(settings: Settings | None = None) -> TagConfig:
    """Load the tag configuration referenced by the current settings.

    Raises:
        ConfigurationError: If no path is configured, or loading fails.
    """
    if settings is None:
        from pagetools.settings.config import get_settings

        settings = get_settings()

    path = settings.tagging.config_path
    if not path:
        raise ConfigurationError(f"Tag config path is not set. Set {CONFIG_PATH_ENV_VAR} to a JSON file.")
    return load_tag_config(path)
