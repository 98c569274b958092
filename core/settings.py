"""
User settings persisted as JSON in the home directory.

Settings provide defaults for the classifier and indexer options. Values passed
on the command line override them.
"""

import json
from pathlib import Path
from typing import Any, Optional

from core.classifier import ClassifierOptions
from core.exceptions import ErrorCode, ValidationError
from core.file_io import (
    FileReader,
    FileWriter,
    FilesystemFileReader,
    FilesystemFileWriter,
)
from core.indexer import IndexerOptions
from models import ProjectType, ScoringStrategy

CONFIG_DIR = Path.home() / ".autoinfra"
CONFIG_FILE = CONFIG_DIR / "settings.json"

SETTINGS_KEYS = (
    "project_type",
    "primary_language",
    "framework",
    "enable_content_analysis",
    "max_files",
    "max_file_size",
    "custom_ignore_patterns",
    "scoring_strategy",
)


def get_config_file(
    config_file: Path = CONFIG_FILE, reader: Optional[FileReader] = None
) -> dict[str, Any]:
    """
    Load saved settings.

    Args:
        config_file: Location of the settings file.
        reader: File reader to use. Defaults to FilesystemFileReader.

    Returns:
        The settings dictionary, or an empty dictionary if no settings exist.

    Raises:
        ValidationError: If the file is not a JSON object.
    """
    if not config_file.exists():
        return {}

    file_content = (reader or FilesystemFileReader()).read_file(config_file)
    if not file_content.strip():
        return {}

    try:
        data = json.loads(file_content)
    except json.JSONDecodeError as e:
        raise _invalid(f"Settings file is not valid JSON: {config_file}") from e

    if not isinstance(data, dict):
        raise _invalid(f"Settings file must contain a JSON object: {config_file}")

    return data


def save_config(
    settings: dict[str, Any],
    config_file: Path = CONFIG_FILE,
    writer: Optional[FileWriter] = None,
) -> None:
    """
    Save settings, keeping only known keys.

    Args:
        settings: The settings to save.
        config_file: Location of the settings file. Its directory is created if
            needed.
        writer: File writer to use. Defaults to a FilesystemFileWriter for
            `config_file`.

    Raises:
        FileWriteError: If the settings cannot be written.
    """
    data = {key: settings[key] for key in SETTINGS_KEYS if key in settings}

    if writer is None:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        writer = FilesystemFileWriter(config_file)

    writer.write_file(json.dumps(data, indent=2), mode="w")


def build_classifier_options(
    config: dict[str, Any], **overrides: Any
) -> ClassifierOptions:
    """
    Build classifier options from settings and overrides.

    Overrides whose value is None are ignored, so unset command line options
    fall back to the saved settings, and then to the defaults.

    Raises:
        ValidationError: If a value has the wrong type or is not a known choice.
    """
    values = _merge(config, overrides)
    options: dict[str, Any] = {}

    if "project_type" in values:
        options["project_type"] = parse_project_type(values["project_type"])
    if "primary_language" in values:
        options["primary_language"] = _require(values, "primary_language", str)
    if "framework" in values:
        options["framework"] = _require(values, "framework", str)
    if "enable_content_analysis" in values:
        options["enable_content_analysis"] = _require(
            values, "enable_content_analysis", bool
        )

    return ClassifierOptions(**options)


def build_indexer_options(config: dict[str, Any], **overrides: Any) -> IndexerOptions:
    """
    Build indexer options from settings and overrides.

    Custom ignore patterns from the settings and the overrides are combined.

    Raises:
        ValidationError: If a value has the wrong type or is out of range.
    """
    ignore_patterns = [
        *_require_str_list(config, "custom_ignore_patterns"),
        *_require_str_list(overrides, "custom_ignore_patterns"),
    ]
    values = _merge(config, overrides)
    options: dict[str, Any] = {"custom_ignore_patterns": tuple(ignore_patterns)}

    for key in ("max_files", "max_file_size"):
        if key in values:
            value = _require(values, key, int)
            if value <= 0:
                raise _invalid(f"'{key}' must be a positive integer, got {value}")
            options[key] = value

    if "scoring_strategy" in values:
        options["scoring_strategy"] = parse_scoring_strategy(values["scoring_strategy"])

    return IndexerOptions(**options)


def parse_project_type(value: Any) -> ProjectType:
    try:
        return ProjectType(str(value).strip().lower())
    except ValueError as e:
        choices = ", ".join(ProjectType)
        raise _invalid(f"Unknown project type '{value}'. Choose one of: {choices}") from e


def parse_scoring_strategy(value: Any) -> ScoringStrategy:
    try:
        return ScoringStrategy(str(value).strip().lower())
    except ValueError as e:
        choices = ", ".join(ScoringStrategy)
        raise _invalid(
            f"Unknown scoring strategy '{value}'. Choose one of: {choices}"
        ) from e


def _merge(config: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = {k: v for k, v in config.items() if v is not None}
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return merged


def _require(values: dict[str, Any], key: str, expected: type) -> Any:
    value = values[key]
    # bool is a subclass of int, but True is not a valid file count
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise _invalid(
            f"'{key}' must be of type {expected.__name__}, got {type(value).__name__}"
        )
    return value


def _require_str_list(values: dict[str, Any], key: str) -> list[str]:
    value = values.get(key)
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(
        isinstance(v, str) for v in value
    ):
        raise _invalid(f"'{key}' must be a list of strings")
    return list(value)


def _invalid(message: str) -> ValidationError:
    return ValidationError(
        ErrorCode.INVALID_CONFIGURATION,
        message=message,
        suggestions=[
            f"Fix or delete the settings file at {CONFIG_FILE}",
            "Run the configure command to recreate your settings",
        ],
    )
