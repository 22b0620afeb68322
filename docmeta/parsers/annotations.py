"""Annotation parser for JSDoc-style documentation comments.

Turns the raw text of a documentation comment into an ordered list of
AnnotationMetadata records. Parsing is line-oriented: each line is
stripped of comment decoration, and a small two-state machine tracks
whether a tag is currently open and collecting content.

The parser is total. Any string, including one with no comment markers
or no recognized tags, yields a (possibly empty) list.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from docmeta.parsers.structure import AnnotationMetadata
from docmeta.utils.config import AnnotationConfig

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|[\r\n]")
_LEADING_DECORATION = re.compile(r"^[/*\s]+")
_TRAILING_CLOSER = re.compile(r"\s*\*/$")


def clean_comment_line(line: str) -> str:
    """Strip comment decoration from a single physical line.

    Removes surrounding whitespace, the leading run of '/', '*' and
    whitespace characters, and a trailing block-comment closer.

    Args:
        line: One line of a raw comment.

    Returns:
        The semantic text of the line, possibly empty.
    """
    text = _LEADING_DECORATION.sub("", line.strip())
    return _TRAILING_CLOSER.sub("", text)


@dataclass
class _OpenAnnotation:
    """Payload of the collecting state: the tag being accumulated."""

    tag: str
    lines: list[str] = field(default_factory=list)
    is_multi_line: bool = False

    def append(self, line: str) -> None:
        # Blank lines count too; the final strip drops trailing ones.
        self.lines.append(line)
        self.is_multi_line = True

    def finalize(self) -> Optional[AnnotationMetadata]:
        content = "\n".join(self.lines).strip()
        if not content:
            return None
        return AnnotationMetadata(
            tag=self.tag, content=content, is_multi_line=self.is_multi_line
        )


class AnnotationParser:
    """Parses documentation comments into annotation records.

    Only tags listed in the configuration start an annotation. Lines
    carrying any other tag are treated like ordinary text: with
    continuation enabled they are folded into the open annotation.
    """

    def __init__(self, config: Optional[AnnotationConfig] = None) -> None:
        self.config = config or AnnotationConfig()

    def parse(self, comment: str) -> list[AnnotationMetadata]:
        """Parse a raw comment into annotations.

        Args:
            comment: Comment text, with or without delimiters such as
                '/**', leading '*' and '*/'.

        Returns:
            Annotations in the order their tags appear. Tags with no
            content are omitted.
        """
        annotations: list[AnnotationMetadata] = []
        if not comment:
            return annotations

        # None while idle, the open annotation while collecting.
        current: Optional[_OpenAnnotation] = None

        for raw_line in _LINE_BREAK.split(comment):
            line = clean_comment_line(raw_line)
            tag = self._match_tag(line)

            if tag is not None:
                self._emit(current, annotations)
                current = _OpenAnnotation(tag=tag, lines=[line[len(tag) :].strip()])
            elif current is not None and self.config.multi_line_continuation:
                current.append(line)

        self._emit(current, annotations)
        return annotations

    def _match_tag(self, line: str) -> Optional[str]:
        """Return the first configured tag that prefixes the line.

        Args:
            line: A cleaned comment line.

        Returns:
            The matching tag, or None.
        """
        for tag in self.config.supported_annotation_tags:
            if tag and line.startswith(tag):
                return tag
        return None

    def _emit(
        self,
        current: Optional[_OpenAnnotation],
        annotations: list[AnnotationMetadata],
    ) -> None:
        """Finalize the open annotation, if any, and collect it."""
        if current is None:
            return
        annotation = current.finalize()
        if annotation is None:
            logger.debug("Dropping %s annotation with empty content", current.tag)
            return
        annotations.append(annotation)
