"""Tests for the analysis pipeline on source text."""

import pytest

from rust_imports.analyzer import analyze_source, filter_imports
from rust_imports.errors import RustParseError
from rust_imports.models import Hints, ImportKind


def test_filter_imports_keeps_lowercase_names_sorted() -> None:
    """Test that only lowercase-leading names survive, in sorted order."""
    names = {"tokio", "HashMap", "Self", "anyhow", "_private", "serde"}
    assert filter_imports(names) == ("anyhow", "serde", "tokio")


def test_filter_imports_empty() -> None:
    """Test filtering an empty collection."""
    assert filter_imports([]) == ()


def test_uppercase_path_roots_are_dropped() -> None:
    """Test that type-rooted paths never appear in the output."""
    source = """
fn f() {
    let v = Vec::new();
    let s = String::from("x");
    let o = Ordering::Less;
    let n = std::mem::take(&mut 1);
}
"""
    result = analyze_source(source)
    assert result.imports == ("std",)


def test_normal_import_excluded_from_test_imports() -> None:
    """Test that a crate used in both normal and test code is only a normal import."""
    source = """
use alpha::beta;

#[cfg(test)]
mod m {
    use gamma::delta;

    fn f() {
        alpha::x();
        gamma::y();
    }
}
"""
    result = analyze_source(source)
    assert result.imports == ("alpha",)
    assert result.test_imports == ("gamma",)


def test_grouped_rename_reports_only_the_crate() -> None:
    """Test that renaming a type inside a group adds no module or type to the output."""
    source = """
use std::{fmt::Result as FmtResult, io::Result as IoResult};

fn f() -> IoResult<()> {
    Ok(())
}
"""
    result = analyze_source(source)
    assert result.imports == ("std",)


def test_extern_crate_only() -> None:
    """Test a file with a single extern crate declaration."""
    result = analyze_source("extern crate serde;\n")
    assert result.imports == ("serde",)
    assert result.test_imports == ()
    assert result.hints == Hints()


def test_local_module_is_not_an_import() -> None:
    """Test that a locally declared module hides the external-looking path."""
    result = analyze_source("mod a;\nmod b {\n    use a::thing;\n}\n")
    assert "a" not in result.imports
    assert result.imports == ()


def test_test_only_monotonic_through_nesting() -> None:
    """Test that every nesting level under a test function stays test-only."""
    source = """
#[test]
fn deep() {
    {
        {
            let f = || {
                mockall::mock();
            };
        }
    }
}
"""
    result = analyze_source(source)
    assert result.imports == ()
    assert result.test_imports == ("mockall",)
    assert result.hints.has_test is True


def test_test_after_normal_use_order_independent() -> None:
    """Test that the normal classification wins even when the test use comes first."""
    source = """
#[cfg(test)]
mod tests {
    fn t() { itertools::assert_equal(); }
}

fn run() { itertools::join(); }
"""
    result = analyze_source(source)
    assert result.imports == ("itertools",)
    assert result.test_imports == ()


def test_analyze_source_parse_error() -> None:
    """Test that malformed source is a fatal error, never a partial result."""
    with pytest.raises(RustParseError):
        analyze_source("fn main() {\n    let x = ;\n}\n", "main.rs")


def test_binary_with_tests_and_hints() -> None:
    """Test the hints of a small binary crate with unit tests."""
    source = """
use clap::Parser;

#[derive(Parser)]
struct Args {
    #[arg(long)]
    name: String,
}

fn main() {
    let args = Args::parse();
    println!("{}", args.name);
}

#[cfg(test)]
mod tests {
    use super::*;

    #[test]
    fn parses() {
        let args = Args::try_parse_from(["x", "--name", "y"]);
        assert!(args.is_ok());
        insta::assert_debug_snapshot!(args);
    }
}
"""
    result = analyze_source(source, "main.rs")
    assert result.imports == ("clap",)
    assert result.test_imports == ("insta",)
    assert result.hints == Hints(has_main=True, has_test=True, has_proc_macro=False)


def test_records_cover_only_reported_crates() -> None:
    """Test that first-seen lines are kept for reported crates and dropped for filtered names."""
    source = """use serde::Serialize;
use rand::Rng;

#[cfg(test)]
mod tests {
    fn t() {
        serde::de::ignore();
        quickcheck::run();
    }
}
"""
    result = analyze_source(source)
    assert result.imports == ("rand", "serde")
    assert result.test_imports == ("quickcheck",)
    assert result.first_line("serde", ImportKind.NORMAL) == 1
    assert result.first_line("rand", ImportKind.NORMAL) == 2
    assert result.first_line("quickcheck", ImportKind.TEST_ONLY) == 8

    # serde was also seen in test code, but it is a normal import
    assert result.first_line("serde", ImportKind.TEST_ONLY) is None
    assert {record.name for record in result.records} == {"serde", "rand", "quickcheck"}
