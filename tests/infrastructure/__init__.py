"""
Shared test infrastructure for bookimport.

Modules:
- file_utils: creating plain and annotated files
"""

from .file_utils import COMMENT_MAP, write, marker, annotated, write_annotated

__all__ = ["COMMENT_MAP", "write", "marker", "annotated", "write_annotated"]
