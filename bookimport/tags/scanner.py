from __future__ import annotations

import re
from typing import Iterator, List, Optional

from .model import AnnotationMarker, MarkerKind
from ..syntax import DEFAULT_SYNTAX, ImportSyntax

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> List[str]:
    """
    Split into lines without line terminators.

    Unlike str.splitlines(), only \\n, \\r\\n and \\r end a line: form feeds
    and other separators stay inside the line so bodies are kept verbatim.
    """
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def match_marker(line: str, index: int, syntax: ImportSyntax = DEFAULT_SYNTAX) -> Optional[AnnotationMarker]:
    """
    Recognize a marker on one line.

    Comment characters around the marker are irrelevant:
      // @book start foo
      # @book end foo
      <!-- @book start foo -->
    Only the first marker of a line counts.
    """
    stripped = line.strip()
    if not stripped:
        return None
    m = syntax.marker.search(stripped)
    if not m:
        return None
    kind = MarkerKind.START if m.group("kind") == "start" else MarkerKind.END
    return AnnotationMarker(kind=kind, tag=m.group("tag").strip(), line_index=index)


def scan_markers(text: str, syntax: ImportSyntax = DEFAULT_SYNTAX) -> Iterator[AnnotationMarker]:
    """Yield every marker of the text in line order."""
    for i, ln in enumerate(split_lines(text)):
        marker = match_marker(ln, i, syntax)
        if marker is not None:
            yield marker


__all__ = ["split_lines", "match_marker", "scan_markers"]
