"""Main analysis orchestrator for Rust import discovery."""

import logging
from collections.abc import Iterable
from pathlib import Path

from rust_imports.ast_visitors.import_discovery import discover_imports
from rust_imports.ast_visitors.parse_ast import ParsedSource, parse_tree_from_file, parse_tree_from_source
from rust_imports.errors import RustImportsError
from rust_imports.models import FileAnalysis, ImportKind, RustImports

logger = logging.getLogger(__name__)


def filter_imports(names: Iterable[str]) -> tuple[str, ...]:
    """Keep only names that can be crates, sorted.

    Crate names start with a lowercase letter; anything else (types, enum
    variants, consts, ``_private`` names) is dropped.
    """
    return tuple(sorted(name for name in names if name[:1].islower()))


def analyze_tree(parsed: ParsedSource) -> RustImports:
    """Complete analysis pipeline for a parsed Rust file.

    Args:
        parsed: Parsed syntax tree and source

    Returns:
        RustImports with normal and test-only crates and structural hints.
        A crate needed by normal builds never appears in ``test_imports``.
    """
    discovered = discover_imports(parsed.tree)

    # 1. A crate already required unconditionally is not test-only
    test_imports = discovered.test_imports - discovered.imports

    # 2. Drop type names and other non-crate identifiers
    imports = filter_imports(discovered.imports)
    test_only = filter_imports(test_imports)

    # 3. Keep the first sighting of every crate that made it into the output
    kept = {(name, ImportKind.NORMAL) for name in imports} | {(name, ImportKind.TEST_ONLY) for name in test_only}
    records = tuple(r for r in discovered.records if (r.name, r.kind) in kept)

    result = RustImports(hints=discovered.hints, imports=imports, test_imports=test_only, records=records)
    logger.debug(
        "%s: %d import(s), %d test import(s), %s",
        parsed.filename,
        len(result.imports),
        len(result.test_imports),
        result.hints,
    )
    return result


def analyze_source(source: str, filename: str = "lib.rs") -> RustImports:
    """Analyze Rust source text.

    Raises:
        RustParseError: If the source contains a syntax error
    """
    return analyze_tree(parse_tree_from_source(source, filename))


def analyze_file(file_path: str | Path) -> RustImports:
    """Complete analysis pipeline for a single Rust file.

    Raises:
        SourceReadError: If the file cannot be read
        RustParseError: If the source contains a syntax error
    """
    return analyze_tree(parse_tree_from_file(Path(file_path)))


def analyze_files(file_paths: Iterable[str | Path]) -> list[FileAnalysis]:
    """Analyze several files independently.

    A file that cannot be read or parsed is reported in its FileAnalysis and
    does not stop the remaining files from being analyzed.
    """
    analyses: list[FileAnalysis] = []
    for file_path in file_paths:
        path = Path(file_path)
        try:
            result = analyze_file(path)
        except RustImportsError as e:
            logger.warning("Skipping %s: %s", path, e)
            analyses.append(FileAnalysis(path=path, result=None, error=str(e)))
        else:
            analyses.append(FileAnalysis(path=path, result=result, error=None))
    return analyses
