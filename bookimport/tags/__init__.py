"""
Tagged regions in annotated files: marker scanning and extraction.
"""

from .extract import extract, find_region, list_tags
from .model import AnnotationMarker, MarkerKind, TaggedRegion
from .scanner import scan_markers, split_lines

__all__ = [
    "extract",
    "find_region",
    "list_tags",
    "AnnotationMarker",
    "MarkerKind",
    "TaggedRegion",
    "scan_markers",
    "split_lines",
]
