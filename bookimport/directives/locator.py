"""
Directive locator for host documents.

Finds directives such as

    {{#bookimport ../src/lib.rs@my-tag}}
    {{ #bookimport ./fixture.css@cool-css }}

A directive prefixed with the escape character is left alone:

    /{{#bookimport ./ignored.txt@foo-bar}}
"""

from __future__ import annotations

from typing import Iterator, List

from .model import ImportDirective, LocatedDirective, MalformedDirective, Span
from ..syntax import DEFAULT_SYNTAX, ImportSyntax, is_valid_tag

_CLOSE = "}}"


def parse_directive_body(body: str, raw: str, span: Span) -> LocatedDirective:
    """
    Parse the text between the keyword and the closing braces.

    Everything up to the LAST '@' is the path (paths may contain '@'),
    everything after it is the tag.
    """
    if "@" not in body:
        return MalformedDirective(raw=raw, span=span, reason="missing '@' between path and tag")

    path, tag = body.rsplit("@", 1)
    path = path.strip()
    tag = tag.strip()

    if not path:
        return MalformedDirective(raw=raw, span=span, reason="empty path")
    if not tag:
        return MalformedDirective(raw=raw, span=span, reason="empty tag")
    if not is_valid_tag(tag):
        return MalformedDirective(
            raw=raw, span=span,
            reason=f"invalid tag name '{tag}' (allowed: letters, digits, '_', '.', '-')",
        )
    return ImportDirective(target_path=path, tag=tag, span=span, raw=raw)


class DirectiveScan:
    """
    Lazy, restartable scan of a document for directives.

    Every iteration walks the document once from the beginning and yields
    ImportDirective and MalformedDirective items in document order.
    A malformed directive never stops the scan.
    """

    def __init__(self, text: str, syntax: ImportSyntax = DEFAULT_SYNTAX):
        self.text = text
        self.syntax = syntax

    def __iter__(self) -> Iterator[LocatedDirective]:
        text = self.text
        opener = self.syntax.directive_open
        escape = self.syntax.escape_char
        pos = 0

        while True:
            m = opener.search(text, pos)
            if m is None:
                return

            start = m.start()
            line_end = text.find("\n", m.end())
            if line_end == -1:
                line_end = len(text)
            close = text.find(_CLOSE, m.end(), line_end)

            # Escaped by the author: keep as is
            if start > 0 and text[start - 1] == escape:
                pos = close + len(_CLOSE) if close != -1 else m.end()
                continue

            if close == -1:
                end = line_end
                if end > start and text[end - 1] == "\r":
                    end -= 1
                yield MalformedDirective(
                    raw=text[start:end],
                    span=(start, end),
                    reason="unterminated directive, missing '}}' on the same line",
                )
                pos = max(end, m.end())
                continue

            end = close + len(_CLOSE)
            yield parse_directive_body(text[m.end():close], text[start:end], (start, end))
            pos = end

    def directives(self) -> List[ImportDirective]:
        """Well-formed directives only."""
        return [d for d in self if isinstance(d, ImportDirective)]

    def malformed(self) -> List[MalformedDirective]:
        """Malformed directives only."""
        return [d for d in self if isinstance(d, MalformedDirective)]

    def __repr__(self) -> str:
        return f"DirectiveScan(keyword={self.syntax.directive_keyword!r}, length={len(self.text)})"


def find_directives(document_text: str, syntax: ImportSyntax = DEFAULT_SYNTAX) -> DirectiveScan:
    """Scan a host document for directives (see DirectiveScan)."""
    return DirectiveScan(document_text, syntax)


__all__ = ["DirectiveScan", "find_directives", "parse_directive_body"]
