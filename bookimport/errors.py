"""
Exception hierarchy for bookimport.

All expected failures that should be shown to the user as clean
messages (without stack traces) inherit from BookImportError. Each
subclass carries a stable ``kind`` string used by diagnostics.

Bugs and programming errors do not derive from BookImportError and
propagate with full tracebacks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .diagnostics import ImportReport


def _where(source: Optional[str]) -> str:
    return f" in {source}" if source else ""


class BookImportError(Exception):
    """
    Base class for all user-facing errors in bookimport.

    These errors indicate problems that the author can fix:
    missing files, missing or unbalanced tags, malformed directives.
    """
    kind: str = "error"


# ---------------------------------------------------------------------------
# Extraction errors
# ---------------------------------------------------------------------------

class ExtractError(BookImportError):
    """Failure to extract a tagged region from a file."""

    def __init__(self, message: str, tag: str, source: Optional[str] = None):
        self.tag = tag
        self.source = source
        super().__init__(message)


class TagNotFoundError(ExtractError):
    """Raised when no start marker exists for the requested tag."""
    kind = "tag-not-found"

    def __init__(self, tag: str, available: Sequence[str] = (), source: Optional[str] = None):
        self.available = list(available)
        hint = f". Available: {', '.join(self.available)}" if self.available else ""
        super().__init__(
            f"Tag '{tag}' not found{_where(source)}{hint}",
            tag,
            source,
        )


class UnterminatedTagError(ExtractError):
    """Raised when the file ends while a start marker is still open."""
    kind = "unterminated-tag"

    def __init__(self, tag: str, line: int, source: Optional[str] = None):
        self.line = line
        super().__init__(
            f"Tag '{tag}' opened at line {line}{_where(source)} is never closed",
            tag,
            source,
        )


class DuplicateStartError(ExtractError):
    """Raised on a second start marker for a tag that is already open."""
    kind = "duplicate-start"

    def __init__(self, tag: str, line: int, open_line: int, source: Optional[str] = None):
        self.line = line
        self.open_line = open_line
        super().__init__(
            f"Duplicate start of tag '{tag}' at line {line}{_where(source)} "
            f"(already opened at line {open_line})",
            tag,
            source,
        )


class UnmatchedEndError(ExtractError):
    """Raised on an end marker without an open start for the same tag."""
    kind = "unmatched-end"

    def __init__(self, tag: str, line: int, source: Optional[str] = None):
        self.line = line
        super().__init__(
            f"End of tag '{tag}' at line {line}{_where(source)} has no matching start",
            tag,
            source,
        )


class DuplicateTagError(ExtractError):
    """Raised when a file defines more than one complete region for a tag."""
    kind = "duplicate-tag"

    def __init__(self, tag: str, ranges: List[Tuple[int, int]], source: Optional[str] = None):
        self.ranges = list(ranges)
        where = ", ".join(f"{s}-{e}" for s, e in self.ranges)
        super().__init__(
            f"Tag '{tag}' is defined {len(self.ranges)} times{_where(source)} (lines {where})",
            tag,
            source,
        )


# ---------------------------------------------------------------------------
# File and path errors
# ---------------------------------------------------------------------------

class ImportFileNotFoundError(BookImportError):
    """Raised when an import target does not exist or is not a file."""
    kind = "file-not-found"

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File not found: {path}")


class ImportReadError(BookImportError):
    """Raised when an import target exists but cannot be read."""
    kind = "io-error"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read {path}: {reason}")


class PathEscapesProjectError(BookImportError):
    """Raised when an import target resolves outside the project root."""
    kind = "path-escapes-project"

    def __init__(self, path: str, root: str):
        self.path = path
        self.root = root
        super().__init__(f"Import target {path} is outside of project root {root}")


# ---------------------------------------------------------------------------
# Directive and document errors
# ---------------------------------------------------------------------------

class MalformedDirectiveError(BookImportError):
    """Raised for directive text that starts like an import but cannot be parsed."""
    kind = "malformed-directive"

    def __init__(self, raw: str, reason: str):
        self.raw = raw
        self.reason = reason
        super().__init__(f"Malformed directive {raw!r}: {reason}")


class DocumentReadError(BookImportError):
    """Raised when the host document itself cannot be read. Fatal for that document."""
    kind = "document-read"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read document {path}: {reason}")


class ImportFailedError(BookImportError):
    """Raised in strict mode when a document has at least one failed import."""
    kind = "import-failed"

    def __init__(self, report: ImportReport):
        self.report = report
        super().__init__(
            f"{len(report.diagnostics)} import(s) failed in {report.document}:\n{report.format()}"
        )


__all__ = [
    "BookImportError",
    "ExtractError",
    "TagNotFoundError",
    "UnterminatedTagError",
    "DuplicateStartError",
    "UnmatchedEndError",
    "DuplicateTagError",
    "ImportFileNotFoundError",
    "ImportReadError",
    "PathEscapesProjectError",
    "MalformedDirectiveError",
    "DocumentReadError",
    "ImportFailedError",
]
