"""
Import directives in host documents.
"""

from .locator import DirectiveScan, find_directives, parse_directive_body
from .model import ImportDirective, LocatedDirective, MalformedDirective, Span

__all__ = [
    "DirectiveScan",
    "find_directives",
    "parse_directive_body",
    "ImportDirective",
    "LocatedDirective",
    "MalformedDirective",
    "Span",
]
