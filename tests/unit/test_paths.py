"""Unit tests for path helpers."""

from rust_imports.paths import first_segment_name, last_segment_name, node_text, path_segments
from tests.helpers.parsing import find_node


def segment_texts(source: str, node_type: str) -> list[str]:
    return [node_text(segment) for segment in path_segments(find_node(source, node_type))]


def test_expression_path_segments() -> None:
    """Test flattening a nested scoped_identifier."""
    source = "fn f() { std::collections::HashMap::new(); }"
    assert segment_texts(source, "scoped_identifier") == ["std", "collections", "HashMap", "new"]


def test_type_path_segments() -> None:
    """Test flattening a path in type position."""
    source = "struct S { when: chrono::DateTime }"
    assert segment_texts(source, "scoped_type_identifier") == ["chrono", "DateTime"]


def test_turbofish_segments_skip_generic_arguments() -> None:
    """Test that generic arguments do not add segments."""
    source = "fn f() { Vec::<u8>::new(); }"
    assert segment_texts(source, "scoped_identifier") == ["Vec", "new"]


def test_leading_colons_path() -> None:
    """Test that a path starting with :: still yields its named segments."""
    source = "fn f() { ::log::info(); }"
    assert segment_texts(source, "scoped_identifier") == ["log", "info"]


def test_first_and_last_segment_names() -> None:
    """Test reading the outermost segments of a path."""
    node = find_node("fn f() { tokio::runtime::Builder::new(); }", "scoped_identifier")
    assert first_segment_name(node) == "tokio"
    assert last_segment_name(node) == "new"


def test_single_identifier_is_one_segment() -> None:
    """Test that a plain identifier is a single-segment path."""
    node = find_node("use serde;", "identifier")
    assert [node_text(segment) for segment in path_segments(node)] == ["serde"]
