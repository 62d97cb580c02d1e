"""
Textual surfaces of a deployment.

A deployment fixes one directive keyword (used in host documents) and one
marker keyword (used in annotated files). Both are plain literals, never
regular expressions: they are escaped before being compiled.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

DEFAULT_DIRECTIVE_KEYWORD = "bookimport"
DEFAULT_MARKER_KEYWORD = "@book"
DEFAULT_ESCAPE_CHAR = "/"

# Tag names are shared by markers and directives
TAG_CHARS = r"[A-Za-z0-9_.\-]+"
_TAG_RE = re.compile(rf"^{TAG_CHARS}$")


def is_valid_tag(tag: str) -> bool:
    return bool(_TAG_RE.match(tag))


def _check_keyword(name: str, value: str) -> None:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string")
    if any(ch.isspace() for ch in value):
        raise ValueError(f"{name} must not contain whitespace: {value!r}")


@dataclass(frozen=True)
class ImportSyntax:
    """
    Directive and marker syntax of one deployment.

    Directives in host documents:
        {{#bookimport ../src/lib.rs@my-tag}}

    Markers in annotated files (any comment style around them):
        // @book start my-tag
        ...
        // @book end my-tag
    """
    directive_keyword: str = DEFAULT_DIRECTIVE_KEYWORD
    marker_keyword: str = DEFAULT_MARKER_KEYWORD
    escape_char: str = DEFAULT_ESCAPE_CHAR

    # Compiled in __post_init__
    directive_open: re.Pattern = field(init=False, repr=False, compare=False)
    marker: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _check_keyword("directive_keyword", self.directive_keyword)
        _check_keyword("marker_keyword", self.marker_keyword)
        if not isinstance(self.escape_char, str) or len(self.escape_char) != 1:
            raise ValueError(f"escape_char must be a single character, got {self.escape_char!r}")

        # {{#bookimport   or   {{ #bookimport  (keyword followed by whitespace or }})
        directive_open = re.compile(
            r"\{\{[ \t]*\#" + re.escape(self.directive_keyword) + r"(?=[ \t]|\}\})"
        )
        # @book start tag  /  @book end tag, not glued to a preceding word.
        # The tag ends at whitespace, end of line or a comment closer (--> or */).
        marker = re.compile(
            r"(?<![\w@])" + re.escape(self.marker_keyword)
            + r"[ \t]+(?P<kind>start|end)[ \t]+(?P<tag>" + TAG_CHARS + r"?)"
            + r"(?=-->|\*/|\s|$)"
        )
        object.__setattr__(self, "directive_open", directive_open)
        object.__setattr__(self, "marker", marker)

    def directive_text(self, path: str, tag: str) -> str:
        """Canonical directive text for a path and tag."""
        return "{{#" + self.directive_keyword + " " + path + "@" + tag + "}}"

    def marker_text(self, kind: str, tag: str) -> str:
        """Canonical marker text (without comment characters)."""
        return f"{self.marker_keyword} {kind} {tag}"


DEFAULT_SYNTAX = ImportSyntax()


__all__ = [
    "ImportSyntax",
    "DEFAULT_SYNTAX",
    "DEFAULT_DIRECTIVE_KEYWORD",
    "DEFAULT_MARKER_KEYWORD",
    "DEFAULT_ESCAPE_CHAR",
    "TAG_CHARS",
    "is_valid_tag",
]
