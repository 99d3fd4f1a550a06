"""Core data models for the Rust import analyzer."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass
class Scope:
    """One lexical frame: the file root, a module body, a function or a block.

    ``is_test_only`` is fixed when the frame is pushed and never changes afterwards.
    """

    is_test_only: bool = False
    local_names: list[str] = field(default_factory=list)  # names this frame declared, in order


class ImportKind(Enum):
    """Build configuration in which a crate reference was observed."""

    NORMAL = "normal"
    TEST_ONLY = "test_only"


@dataclass(frozen=True)
class ImportRecord:
    """First observation of a crate name in one classification bucket."""

    name: str
    kind: ImportKind
    line_number: int | None  # 1-based, None when the caller has no position


@dataclass(frozen=True)
class ItemMarkers:
    """What the outer attributes of an item say about it."""

    is_test: bool  # #[test]
    is_proc_macro: bool  # #[proc_macro]
    is_cfg_test: bool  # #[cfg(test)]


@dataclass(frozen=True)
class Hints:
    """Structural hints about the analyzed file."""

    has_main: bool = False
    has_test: bool = False
    has_proc_macro: bool = False


@dataclass(frozen=True)
class DiscoveredImports:
    """Raw outcome of one traversal, before differencing and filtering."""

    imports: frozenset[str]
    test_imports: frozenset[str]
    records: tuple[ImportRecord, ...]  # in the order the names were first observed
    hints: Hints


@dataclass(frozen=True)
class RustImports:
    """Crates referenced by one Rust file, split by build configuration.

    ``test_imports`` never contains a crate that is also in ``imports``.
    """

    hints: Hints
    imports: tuple[str, ...]
    test_imports: tuple[str, ...]
    records: tuple[ImportRecord, ...] = ()  # where each reported crate was first seen

    def first_line(self, name: str, kind: ImportKind) -> int | None:
        """Return the line a crate was first referenced on in the given bucket, if known."""
        for record in self.records:
            if record.name == name and record.kind == kind:
                return record.line_number
        return None

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serializable representation."""
        return {
            "imports": list(self.imports),
            "test_imports": list(self.test_imports),
            "hints": {
                "has_main": self.hints.has_main,
                "has_test": self.hints.has_test,
                "has_proc_macro": self.hints.has_proc_macro,
            },
        }


@dataclass(frozen=True)
class FileAnalysis:
    """Outcome of analyzing a single file: exactly one of result or error is set."""

    path: Path
    result: RustImports | None
    error: str | None

    @property
    def ok(self) -> bool:
        return self.result is not None
