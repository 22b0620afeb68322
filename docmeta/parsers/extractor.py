"""Function signature metadata extraction for JavaScript and TypeScript.

Reads a source file, parses it with tree-sitter, locates named function
declarations and parses each one's leading documentation comment into
annotation records.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

import tree_sitter
import tree_sitter_javascript as tsjs
import tree_sitter_typescript as tsts

from docmeta.parsers.annotations import AnnotationParser
from docmeta.parsers.errors import SourceReadError, SourceSyntaxError
from docmeta.parsers.locator import DeclarationLocator, node_location
from docmeta.parsers.structure import FunctionMetadata, Language, SourceLocation
from docmeta.utils.config import AnnotationConfig

logger = logging.getLogger(__name__)

_LANGUAGES = {
    Language.JAVASCRIPT: tree_sitter.Language(tsjs.language()),
    Language.TYPESCRIPT: tree_sitter.Language(tsts.language_typescript()),
    Language.TSX: tree_sitter.Language(tsts.language_tsx()),
}

_SUFFIXES = {
    ".js": Language.JAVASCRIPT,
    ".jsx": Language.JAVASCRIPT,
    ".mjs": Language.JAVASCRIPT,
    ".cjs": Language.JAVASCRIPT,
    ".ts": Language.TYPESCRIPT,
    ".mts": Language.TYPESCRIPT,
    ".cts": Language.TYPESCRIPT,
    ".tsx": Language.TSX,
}

_BOM = "\ufeff"


def detect_language(path: Union[str, Path]) -> Language:
    """Detect the source language from a file suffix.

    Args:
        path: File path to check.

    Returns:
        The matching Language, TYPESCRIPT for unknown suffixes.
    """
    return _SUFFIXES.get(Path(path).suffix.lower(), Language.TYPESCRIPT)


class SignatureExtractor:
    """Extracts FunctionMetadata records from JS/TS sources.

    Holds an immutable AnnotationConfig and one tree-sitter parser per
    language, created on first use. Extraction itself keeps no state
    between calls, so results are identical for identical input.
    """

    def __init__(self, config: Optional[AnnotationConfig] = None) -> None:
        self.config = config or AnnotationConfig()
        self._locator = DeclarationLocator()
        self._annotation_parser = AnnotationParser(self.config)
        self._parsers: dict[Language, tree_sitter.Parser] = {}

    def parse_file(
        self, file_path: Union[str, Path], language: Optional[Language] = None
    ) -> list[FunctionMetadata]:
        """Extract function metadata from a source file.

        Args:
            file_path: Path to the JS/TS file.
            language: Language to parse as. Detected from the file
                suffix when None.

        Returns:
            Function metadata in document order.

        Raises:
            SourceReadError: If the file cannot be read or decoded.
            SourceSyntaxError: If the file does not parse cleanly.
        """
        path = Path(file_path)
        try:
            source = path.read_bytes().decode(self.config.text_encoding)
        except (OSError, UnicodeDecodeError, LookupError) as e:
            raise SourceReadError(str(file_path), e) from e

        return self.parse_source(
            source, str(file_path), language or detect_language(path)
        )

    def parse_source(
        self,
        source: str,
        file_path: str = "<string>",
        language: Language = Language.TYPESCRIPT,
    ) -> list[FunctionMetadata]:
        """Extract function metadata from source text.

        Args:
            source: JavaScript or TypeScript source code.
            file_path: Name used in error messages and logs.
            language: Grammar to parse with.

        Returns:
            Function metadata in document order.

        Raises:
            SourceSyntaxError: If tree-sitter reports a syntax error.
        """
        if source.startswith(_BOM):
            source = source[len(_BOM) :]
        source_bytes = source.encode("utf-8")
        tree = self._parser_for(language).parse(source_bytes)
        root = tree.root_node

        if root.has_error:
            location = _first_error_location(root, source_bytes)
            raise SourceSyntaxError(file_path, location.line, location.column)

        functions = [
            FunctionMetadata(
                name=site.name,
                location=site.location,
                annotations=tuple(self._annotation_parser.parse(site.raw_comment)),
            )
            for site in self._locator.locate(root, source_bytes)
        ]

        logger.debug("Parsed %s: %d functions", file_path, len(functions))
        return functions

    def parse_many(
        self, file_paths: Iterable[Union[str, Path]]
    ) -> dict[str, list[FunctionMetadata]]:
        """Extract function metadata from several files.

        Each file is an independent run; the first failure propagates.

        Args:
            file_paths: Paths to parse, in the order results should appear.

        Returns:
            Mapping of path string to that file's function metadata.
        """
        return {str(p): self.parse_file(p) for p in file_paths}

    def _parser_for(self, language: Language) -> tree_sitter.Parser:
        """Return the cached tree-sitter parser for a language."""
        parser = self._parsers.get(language)
        if parser is None:
            parser = tree_sitter.Parser(_LANGUAGES[language])
            self._parsers[language] = parser
        return parser


def _first_error_location(
    root: tree_sitter.Node, source_bytes: bytes
) -> SourceLocation:
    """Find the 1-based position of the first ERROR or missing node.

    Only subtrees flagged with has_error are searched.

    Args:
        root: Root node of a tree containing errors.
        source_bytes: The UTF-8 source the tree was parsed from.

    Returns:
        The error position, with the column counted in characters.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node_location(node, source_bytes)
        stack.extend(
            child
            for child in reversed(node.children)
            if child.has_error or child.is_missing
        )
    return node_location(root, source_bytes)
