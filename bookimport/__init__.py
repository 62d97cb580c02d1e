"""
bookimport: import tagged regions of files into documentation.

    {{#bookimport ../src/lib.rs@my-tag}}

is replaced by the lines between `// @book start my-tag` and
`// @book end my-tag` in ../src/lib.rs (relative to the document).
"""

from .config import ConfigError, ImportConfig, find_config, load_config
from .diagnostics import Diagnostic, ImportReport, Severity
from .directives import ImportDirective, MalformedDirective, find_directives
from .engine import ImportEngine, ProcessedDocument, ResolvedImport, process_document, process_file
from .errors import (
    BookImportError,
    DocumentReadError,
    DuplicateStartError,
    DuplicateTagError,
    ExtractError,
    ImportFailedError,
    ImportFileNotFoundError,
    ImportReadError,
    MalformedDirectiveError,
    PathEscapesProjectError,
    TagNotFoundError,
    UnmatchedEndError,
    UnterminatedTagError,
)
from .paths import resolve_target
from .substitute import Replacement, substitute
from .syntax import DEFAULT_SYNTAX, ImportSyntax
from .tags import TaggedRegion, extract, find_region, list_tags

__all__ = [
    "ConfigError",
    "ImportConfig",
    "find_config",
    "load_config",
    "Diagnostic",
    "ImportReport",
    "Severity",
    "ImportDirective",
    "MalformedDirective",
    "find_directives",
    "ImportEngine",
    "ProcessedDocument",
    "ResolvedImport",
    "process_document",
    "process_file",
    "BookImportError",
    "DocumentReadError",
    "DuplicateStartError",
    "DuplicateTagError",
    "ExtractError",
    "ImportFailedError",
    "ImportFileNotFoundError",
    "ImportReadError",
    "MalformedDirectiveError",
    "PathEscapesProjectError",
    "TagNotFoundError",
    "UnmatchedEndError",
    "UnterminatedTagError",
    "resolve_target",
    "Replacement",
    "substitute",
    "DEFAULT_SYNTAX",
    "ImportSyntax",
    "TaggedRegion",
    "extract",
    "find_region",
    "list_tags",
]
