"""Classification of referenced names into normal and test-only crates."""

import logging

from rust_imports.models import ImportKind, ImportRecord
from rust_imports.scope_tracker import ScopeStack

logger = logging.getLogger(__name__)

# Path keywords that refer to the current crate or module, never to a dependency
PATH_KEYWORDS = frozenset({"crate", "self", "super"})


class ImportClassifier:
    """Collects the crate names referenced from normal and test-only scopes.

    Attributes:
        imports: Names referenced from at least one normal scope
        test_imports: Names referenced from at least one test-only scope
        records: First observation of each name in each bucket, in order
    """

    def __init__(self, scope_stack: ScopeStack) -> None:
        self.scope_stack = scope_stack
        self.imports: set[str] = set()
        self.test_imports: set[str] = set()
        self.records: list[ImportRecord] = []

    def record_reference(self, name: str, line_number: int | None = None) -> None:
        """Record ``name`` as a crate reference unless it resolves locally.

        Args:
            name: First segment of a path or use tree
            line_number: 1-based line of the reference, if known
        """
        if name in PATH_KEYWORDS:
            return

        if self.scope_stack.is_shadowed(name):
            logger.debug("Ignoring %r: shadowed by a local declaration", name)
            return

        if self.scope_stack.current_is_test_only():
            bucket, kind = self.test_imports, ImportKind.TEST_ONLY
        else:
            bucket, kind = self.imports, ImportKind.NORMAL

        if name in bucket:
            return
        bucket.add(name)
        self.records.append(ImportRecord(name=name, kind=kind, line_number=line_number))
        logger.debug("Recorded %s reference to %r (line %s)", kind.value, name, line_number)
