from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .directives.model import Span


@dataclass(frozen=True)
class Replacement:
    """Replace document[span[0]:span[1]] with text."""
    span: Span
    text: str


def substitute(document_text: str, replacements: Iterable[Replacement]) -> str:
    """
    Apply replacements in a single left-to-right pass.

    Replacements must come in document order with non-overlapping spans.
    Everything outside the spans is copied untouched; replacement text is
    emitted as is and never scanned again.
    """
    out: List[str] = []
    cur = 0
    n = len(document_text)

    for r in replacements:
        s, e = r.span
        if not (0 <= s <= e <= n):
            raise ValueError(f"Replacement span {r.span} is outside of document (length {n})")
        if s < cur:
            raise ValueError(
                f"Replacement span {r.span} overlaps or precedes the previous one (ends at {cur})"
            )
        # tail before the span
        out.append(document_text[cur:s])
        out.append(r.text)
        cur = e

    out.append(document_text[cur:])
    return "".join(out)


__all__ = ["Replacement", "substitute"]
