"""Data models for documentation metadata extracted from source files.

Defines frozen dataclasses for function declarations, their source
locations and the annotation entries parsed from their documentation
comments. These records are what the extractor hands back to callers
and what the CLI serializes to JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Language(str, Enum):
    """Source languages understood by the extractor."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    TSX = "tsx"


@dataclass(frozen=True)
class SourceLocation:
    """A 1-based line and column in a source file.

    Attributes:
        line: Line number, starting at 1.
        column: Character column within the line, starting at 1.
    """

    line: int
    column: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary with ``line`` and ``column`` keys.
        """
        return {"line": self.line, "column": self.column}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SourceLocation:
        """Deserialize from a dictionary."""
        return cls(line=data["line"], column=data["column"])


@dataclass(frozen=True)
class AnnotationMetadata:
    """One recognized tag occurrence inside a documentation comment.

    Attributes:
        tag: The configured tag that matched (e.g. '@param').
        content: Trimmed text following the tag, continuation lines
            joined with newlines.
        is_multi_line: Whether at least one continuation line was appended.
    """

    tag: str
    content: str
    is_multi_line: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this annotation.
        """
        return {
            "tag": self.tag,
            "content": self.content,
            "isMultiLine": self.is_multi_line,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnnotationMetadata:
        """Deserialize from a dictionary.

        Args:
            data: Dictionary with annotation fields.

        Returns:
            A new AnnotationMetadata instance.
        """
        return cls(
            tag=data["tag"],
            content=data["content"],
            is_multi_line=data.get("isMultiLine", False),
        )


@dataclass(frozen=True)
class FunctionMetadata:
    """Metadata for a single named function declaration.

    Attributes:
        name: Function identifier.
        annotations: Parsed annotations in the order they appear in the
            leading documentation comment.
        location: Position of the function's name token.
    """

    name: str
    location: SourceLocation
    annotations: tuple[AnnotationMetadata, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this function.
        """
        return {
            "name": self.name,
            "annotations": [a.to_dict() for a in self.annotations],
            "location": self.location.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FunctionMetadata:
        """Deserialize from a dictionary.

        Args:
            data: Dictionary with function fields.

        Returns:
            A new FunctionMetadata instance.
        """
        return cls(
            name=data["name"],
            location=SourceLocation.from_dict(data["location"]),
            annotations=tuple(
                AnnotationMetadata.from_dict(a) for a in data.get("annotations", [])
            ),
        )


@dataclass(frozen=True)
class DeclarationSite:
    """A function declaration found by the locator, before comment parsing.

    Attributes:
        name: Function identifier.
        location: Position of the name token.
        raw_comment: Leading comment text exactly as written, or an
            empty string when the declaration is undocumented.
    """

    name: str
    location: SourceLocation
    raw_comment: str = ""
