from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Tuple


class MarkerKind(enum.Enum):
    START = "start"
    END = "end"


@dataclass(frozen=True)
class AnnotationMarker:
    """A start/end marker line found in an annotated file."""
    kind: MarkerKind
    tag: str                   # non-empty, trimmed
    line_index: int            # 0-based line of the marker

    @property
    def line(self) -> int:
        """1-based line number, for messages."""
        return self.line_index + 1


@dataclass(frozen=True)
class TaggedRegion:
    """
    Lines strictly between a matched start/end pair.

    start_line and end_line are the indices of the marker lines themselves,
    so the content is lines[start_line + 1 : end_line].
    """
    tag: str
    start_line: int
    end_line: int
    lines: Tuple[str, ...]

    @property
    def content(self) -> str:
        return "\n".join(self.lines)

    @property
    def line_range(self) -> Tuple[int, int]:
        """1-based (start marker line, end marker line)."""
        return self.start_line + 1, self.end_line + 1


__all__ = ["MarkerKind", "AnnotationMarker", "TaggedRegion"]
