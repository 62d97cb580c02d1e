from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

Span = Tuple[int, int]  # (start, end_excl) offsets into the host document


@dataclass(frozen=True)
class ImportDirective:
    """
    One import directive in a host document.

    For  {{#bookimport ../book.toml@book-section}}:
      target_path = "../book.toml"   (as written, relative to the document)
      tag         = "book-section"
      raw         = the full directive text, document[span[0]:span[1]]
    """
    target_path: str
    tag: str
    span: Span
    raw: str

    @property
    def start(self) -> int:
        return self.span[0]

    @property
    def end(self) -> int:
        return self.span[1]


@dataclass(frozen=True)
class MalformedDirective:
    """Text that opens like a directive but does not parse as one."""
    raw: str
    span: Span
    reason: str

    @property
    def start(self) -> int:
        return self.span[0]

    @property
    def end(self) -> int:
        return self.span[1]


LocatedDirective = Union[ImportDirective, MalformedDirective]


__all__ = ["Span", "ImportDirective", "MalformedDirective", "LocatedDirective"]
