"""Configuration loader for the documentation metadata extractor.

Loads settings from docmeta/configs/config.yaml and provides typed access
to the annotation and logging sections via dataclasses.
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "configs" / "config.yaml"

DEFAULT_ANNOTATION_TAGS = ("@param", "@returns", "@throws")
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class AnnotationConfig:
    """Settings that control how documentation comments are parsed.

    Attributes:
        supported_annotation_tags: Tags recognized at the start of a
            comment line. Matching is case-sensitive and prefix-based;
            the first tag in this order that matches wins.
        multi_line_continuation: Whether non-tag lines after a tag are
            appended to that tag's content.
        text_encoding: Encoding used to decode source files.
    """

    supported_annotation_tags: tuple[str, ...] = DEFAULT_ANNOTATION_TAGS
    multi_line_continuation: bool = True
    text_encoding: str = "utf-8"

    def __post_init__(self) -> None:
        # Accept any iterable of tags but store an ordered tuple.
        object.__setattr__(
            self, "supported_annotation_tags", tuple(self.supported_annotation_tags)
        )

    def with_overrides(self, **changes: Any) -> "AnnotationConfig":
        """Return a copy with the given fields replaced.

        Fields whose value is None are left untouched, so callers can pass
        optional CLI values straight through.

        Args:
            **changes: Field names mapped to their new values.

        Returns:
            A new AnnotationConfig instance.
        """
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "WARNING"
    format: str = DEFAULT_LOG_FORMAT
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Top-level application configuration."""

    annotations: AnnotationConfig = field(default_factory=AnnotationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _build_annotation_config(data: dict) -> AnnotationConfig:
    """Build an AnnotationConfig from a dictionary.

    Args:
        data: Dictionary with annotation settings.

    Returns:
        A configured AnnotationConfig instance.
    """
    tags = data.get("supported_tags")
    if tags is None:
        tags = DEFAULT_ANNOTATION_TAGS
    cleaned = []
    for tag in tags:
        tag = str(tag).strip()
        if not tag:
            logger.warning("Ignoring empty annotation tag in configuration")
            continue
        cleaned.append(tag)

    return AnnotationConfig(
        supported_annotation_tags=tuple(cleaned),
        multi_line_continuation=data.get("multi_line", True),
        text_encoding=data.get("encoding", "utf-8"),
    )


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load application configuration from a YAML file.

    Reads the YAML config file and constructs a fully typed AppConfig
    object. Falls back to defaults for any missing values.

    Args:
        config_path: Path to the YAML config file. If None, uses the
            config shipped inside the package.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        yaml.YAMLError: If the config file contains invalid YAML.
    """
    path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.warning("Config file not found at %s, using defaults", path)
        return AppConfig()

    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    logger.debug("Loaded configuration from %s", path)

    logging_data = raw.get("logging") or {}
    logging_config = LoggingConfig(
        level=logging_data.get("level", "WARNING"),
        format=logging_data.get("format", DEFAULT_LOG_FORMAT),
        file=logging_data.get("file"),
    )

    return AppConfig(
        annotations=_build_annotation_config(raw.get("annotations") or {}),
        logging=logging_config,
    )
