"""
Extraction of tagged regions.

A region is bracketed by a start and an end marker carrying the same tag:

    before
    // @book start demo
    body line 1
    body line 2
    // @book end demo
    after

Extracting "demo" yields the two body lines, indentation untouched.
One definition per tag per file: a second complete pair is an error,
not a silent choice.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .model import MarkerKind, TaggedRegion
from .scanner import match_marker, scan_markers, split_lines
from ..errors import (
    DuplicateStartError,
    DuplicateTagError,
    TagNotFoundError,
    UnmatchedEndError,
    UnterminatedTagError,
)
from ..syntax import DEFAULT_SYNTAX, ImportSyntax

logger = logging.getLogger(__name__)


def list_tags(text: str, syntax: ImportSyntax = DEFAULT_SYNTAX) -> List[str]:
    """Sorted names of all tags opened in the text."""
    return sorted({m.tag for m in scan_markers(text, syntax) if m.kind is MarkerKind.START})


def find_region(
    text: str,
    tag: str,
    *,
    syntax: ImportSyntax = DEFAULT_SYNTAX,
    source: Optional[str] = None,
) -> TaggedRegion:
    """
    Locate the single region for a tag.

    Args:
        text: Contents of the annotated file
        tag: Requested tag
        syntax: Marker syntax of the deployment
        source: File name used in error messages

    Returns:
        The matched region

    Raises:
        DuplicateStartError: A start marker while the tag is already open
        UnmatchedEndError: An end marker without an open start
        TagNotFoundError: No start marker for the tag at all
        UnterminatedTagError: The file ends while the tag is open
        DuplicateTagError: More than one complete pair for the tag
    """
    lines = split_lines(text)

    # Pending starts, keyed by tag. Only the requested tag is ever entered.
    pending: Dict[str, int] = {}
    regions: List[TaggedRegion] = []

    for i, ln in enumerate(lines):
        marker = match_marker(ln, i, syntax)
        if marker is None or marker.tag != tag:
            continue

        if marker.kind is MarkerKind.START:
            if tag in pending:
                raise DuplicateStartError(tag, marker.line, pending[tag] + 1, source)
            pending[tag] = i
            continue

        start = pending.pop(tag, None)
        if start is None:
            raise UnmatchedEndError(tag, marker.line, source)
        regions.append(TaggedRegion(
            tag=tag,
            start_line=start,
            end_line=i,
            lines=tuple(lines[start + 1:i]),
        ))

    if tag in pending:
        raise UnterminatedTagError(tag, pending[tag] + 1, source)
    if not regions:
        raise TagNotFoundError(tag, list_tags(text, syntax), source)
    if len(regions) > 1:
        raise DuplicateTagError(tag, [r.line_range for r in regions], source)

    region = regions[0]
    logger.debug(
        f"Found tag '{tag}'{' in ' + source if source else ''} "
        f"at lines {region.start_line + 1}-{region.end_line + 1} ({len(region.lines)} lines)"
    )
    return region


def extract(
    text: str,
    tag: str,
    *,
    syntax: ImportSyntax = DEFAULT_SYNTAX,
    source: Optional[str] = None,
) -> str:
    """
    Content of the region for a tag.

    Lines are joined with "\\n" and no trailing newline is added, so a
    directive standing on its own line is replaced by exactly these lines.
    """
    return find_region(text, tag, syntax=syntax, source=source).content


__all__ = ["extract", "find_region", "list_tags"]
