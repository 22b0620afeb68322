"""Tests for metadata data models and serialization."""

import dataclasses
import json

import pytest

from docmeta.parsers.structure import (
    AnnotationMetadata,
    DeclarationSite,
    FunctionMetadata,
    Language,
    SourceLocation,
)


class TestAnnotationMetadata:
    """Tests for AnnotationMetadata."""

    def test_defaults(self) -> None:
        annotation = AnnotationMetadata(tag="@param", content="a x")
        assert annotation.is_multi_line is False

    def test_to_dict_keys(self) -> None:
        annotation = AnnotationMetadata(tag="@returns", content="v", is_multi_line=True)
        assert annotation.to_dict() == {
            "tag": "@returns",
            "content": "v",
            "isMultiLine": True,
        }

    def test_from_dict(self) -> None:
        annotation = AnnotationMetadata.from_dict({"tag": "@throws", "content": "E"})
        assert annotation == AnnotationMetadata(tag="@throws", content="E")


class TestFunctionMetadata:
    """Tests for FunctionMetadata."""

    def test_defaults(self) -> None:
        function = FunctionMetadata(name="f", location=SourceLocation(1, 10))
        assert function.annotations == ()

    def test_to_dict(self) -> None:
        function = FunctionMetadata(
            name="add",
            location=SourceLocation(line=3, column=10),
            annotations=(AnnotationMetadata(tag="@param", content="a first"),),
        )
        assert function.to_dict() == {
            "name": "add",
            "annotations": [
                {"tag": "@param", "content": "a first", "isMultiLine": False}
            ],
            "location": {"line": 3, "column": 10},
        }

    def test_json_serializable(self) -> None:
        function = FunctionMetadata(name="f", location=SourceLocation(1, 1))
        assert json.loads(json.dumps(function.to_dict()))["name"] == "f"

    def test_from_dict(self) -> None:
        data = {
            "name": "g",
            "annotations": [{"tag": "@returns", "content": "x", "isMultiLine": False}],
            "location": {"line": 7, "column": 3},
        }
        function = FunctionMetadata.from_dict(data)
        assert function.name == "g"
        assert function.location == SourceLocation(line=7, column=3)
        assert function.annotations[0].tag == "@returns"

    def test_frozen(self) -> None:
        function = FunctionMetadata(name="f", location=SourceLocation(1, 1))
        with pytest.raises(dataclasses.FrozenInstanceError):
            function.name = "g"  # type: ignore[misc]


class TestDeclarationSite:
    """Tests for DeclarationSite."""

    def test_default_comment_is_empty(self) -> None:
        site = DeclarationSite(name="f", location=SourceLocation(1, 10))
        assert site.raw_comment == ""


class TestLanguage:
    """Tests for the Language enum."""

    def test_values(self) -> None:
        assert Language.JAVASCRIPT.value == "javascript"
        assert Language.TYPESCRIPT.value == "typescript"
        assert Language.TSX.value == "tsx"

    def test_str_comparison(self) -> None:
        assert Language.TSX == "tsx"
