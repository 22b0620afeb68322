"""CLI command for the documentation metadata extractor.

Provides the Click-based 'docmeta' command, which extracts function
metadata from a single JavaScript or TypeScript file and prints it
as JSON.
"""

import json
import logging
import sys
from typing import Optional

import click

from docmeta import __version__
from docmeta.parsers.errors import ExtractionError
from docmeta.parsers.extractor import SignatureExtractor
from docmeta.parsers.structure import Language
from docmeta.utils.config import load_config
from docmeta.utils.logging import setup_logging

logger = logging.getLogger(__name__)

_LANGUAGE_CHOICES = {
    "js": Language.JAVASCRIPT,
    "ts": Language.TYPESCRIPT,
    "tsx": Language.TSX,
}


@click.command()
@click.version_option(version=__version__, prog_name="docmeta")
@click.argument("file", type=click.Path())
@click.option(
    "--config",
    "config_path",
    type=click.Path(),
    default=None,
    help="Path to a YAML config file.",
)
@click.option(
    "--tag",
    "tags",
    multiple=True,
    help="Annotation tag to recognize (repeatable). Replaces the configured tags.",
)
@click.option(
    "--multi-line/--no-multi-line",
    "multi_line",
    default=None,
    help="Append non-tag lines to the preceding tag.",
)
@click.option("--encoding", default=None, help="Source file encoding.")
@click.option(
    "--language",
    type=click.Choice(sorted(_LANGUAGE_CHOICES)),
    default=None,
    help="Parse as this language instead of detecting it from the suffix.",
)
def extract(
    file: str,
    config_path: Optional[str],
    tags: tuple[str, ...],
    multi_line: Optional[bool],
    encoding: Optional[str],
    language: Optional[str],
) -> None:
    """Extract documented function signatures from a JS/TS source file.

    Prints one JSON record per named function declaration, with the
    annotations parsed from its leading documentation comment.
    """
    config = load_config(config_path)
    setup_logging(
        level=config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.file,
    )

    annotation_config = config.annotations.with_overrides(
        supported_annotation_tags=tags or None,
        multi_line_continuation=multi_line,
        text_encoding=encoding,
    )
    extractor = SignatureExtractor(annotation_config)

    try:
        functions = extractor.parse_file(
            file, language=_LANGUAGE_CHOICES.get(language or "")
        )
    except ExtractionError as e:
        logger.debug("Extraction of %s failed", file, exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(
        json.dumps([f.to_dict() for f in functions], indent=2, ensure_ascii=False)
    )
