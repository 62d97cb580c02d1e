"""
Per-document diagnostics.

Every failed directive becomes one Diagnostic tied to its position in the
host document, and the directive is replaced by a visible placeholder.
One failure never blocks the other directives of the document.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

DEFAULT_PLACEHOLDER = "**[bookimport error: {message}]**"


class Severity(str, Enum):
    warn = "warn"
    error = "error"


class Diagnostic(BaseModel):
    kind: str
    severity: Severity = Severity.error
    message: str
    document: str
    line: int
    column: int
    directive: str
    target: Optional[str] = None
    tag: Optional[str] = None

    def format(self) -> str:
        return f"{self.document}:{self.line}:{self.column}: {self.kind}: {self.message}"


class ImportReport(BaseModel):
    document: str
    tool_version: str
    directives: int = 0
    resolved: int = 0
    diagnostics: List[Diagnostic] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    @property
    def failed(self) -> int:
        return len(self.diagnostics)

    def format(self) -> str:
        """One line per diagnostic."""
        return "\n".join(d.format() for d in self.diagnostics)


def position_of(text: str, offset: int) -> Tuple[int, int]:
    """1-based (line, column) of an offset in text."""
    offset = max(0, min(offset, len(text)))
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def render_placeholder(diagnostic: Diagnostic, template: Optional[str] = None) -> str:
    """
    Inline text substituted for a failed directive.

    Plain field substitution without format specs, so braces inside
    messages or directives never break rendering.
    """
    tpl = template if template is not None else DEFAULT_PLACEHOLDER

    def _fmt(s: str) -> str:
        s = s.replace("{kind}", diagnostic.kind)
        s = s.replace("{message}", diagnostic.message)
        s = s.replace("{directive}", diagnostic.directive)
        s = s.replace("{target}", diagnostic.target or "")
        s = s.replace("{tag}", diagnostic.tag or "")
        s = s.replace("{line}", str(diagnostic.line))
        s = s.replace("{column}", str(diagnostic.column))
        return s

    return _fmt(tpl)


__all__ = [
    "DEFAULT_PLACEHOLDER",
    "Severity",
    "Diagnostic",
    "ImportReport",
    "position_of",
    "render_placeholder",
]
