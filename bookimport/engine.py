"""
Main processing pipeline.

For one host document:
  1) locate directives
  2) resolve each one (target path → file text → tagged region)
  3) substitute content, or a placeholder for failures, in document order
  4) report diagnostics
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .config import ImportConfig
from .diagnostics import Diagnostic, ImportReport, Severity, position_of, render_placeholder
from .directives import ImportDirective, LocatedDirective, MalformedDirective, find_directives
from .errors import BookImportError, ImportFailedError, MalformedDirectiveError
from .paths import read_document, read_target, resolve_target
from .substitute import Replacement, substitute
from .tags import extract
from .version import tool_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedImport:
    """Outcome of one directive: either content or an error."""
    directive: LocatedDirective
    content: Optional[str] = None
    error: Optional[BookImportError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ProcessedDocument:
    text: str
    report: ImportReport
    imports: List[ResolvedImport] = field(default_factory=list)


class ImportEngine:
    """
    Resolves import directives of host documents.

    Holds no state between documents: every target file is read again
    for every directive that names it.
    """

    def __init__(self, config: Optional[ImportConfig] = None):
        self.config = config or ImportConfig()
        self.syntax = self.config.syntax
        self._tool_version = tool_version()

    # --- single directive ---------------------------------------------

    def resolve(self, document_path: Path | str, directive: LocatedDirective) -> ResolvedImport:
        """Resolve one directive. User errors end up in ResolvedImport.error."""
        if isinstance(directive, MalformedDirective):
            return ResolvedImport(directive, error=MalformedDirectiveError(directive.raw, directive.reason))

        try:
            path = resolve_target(document_path, directive.target_path, root=self.config.effective_root)
            logger.debug(f'Reading content in "{document_path}" for import "{directive.raw}" from {path}')
            text = read_target(path)
            content = extract(text, directive.tag, syntax=self.syntax, source=str(path))
        except BookImportError as e:
            return ResolvedImport(directive, error=e)

        return ResolvedImport(directive, content=content)

    def _resolve_all(self, document_path: Path, located: Sequence[LocatedDirective]) -> List[ResolvedImport]:
        workers = self.config.workers
        if workers <= 1 or len(located) < 2:
            return [self.resolve(document_path, d) for d in located]

        # Parallel resolution, results put back in document order
        results: Dict[int, ResolvedImport] = {}
        with ThreadPoolExecutor(max_workers=min(workers, len(located))) as executor:
            futures = {
                executor.submit(self.resolve, document_path, d): index
                for index, d in enumerate(located)
            }
            for future in as_completed(futures):
                results[futures[future]] = future.result()
        return [results[i] for i in range(len(located))]

    # --- documents ----------------------------------------------------

    def process_document(self, document_path: Path | str, document_text: str) -> ProcessedDocument:
        """
        Rewrite a host document.

        Args:
            document_path: Location of the document; targets are relative to its directory
            document_text: Contents of the document (never modified)

        Returns:
            New text and the report

        Raises:
            ImportFailedError: In strict mode, when at least one import failed
        """
        document_path = Path(document_path)
        logger.debug(f"Processing document {document_path}")

        located = list(find_directives(document_text, self.syntax))
        resolved = self._resolve_all(document_path, located)

        replacements: List[Replacement] = []
        diagnostics: List[Diagnostic] = []
        # failures only block the document in strict mode
        severity = Severity.error if self.config.strict else Severity.warn
        for item in resolved:
            if item.error is None:
                replacements.append(Replacement(item.directive.span, item.content or ""))
                continue
            diag = self._diagnostic(document_path, document_text, item.directive, item.error, severity)
            logger.warning(diag.format())
            diagnostics.append(diag)
            replacements.append(Replacement(item.directive.span, render_placeholder(diag, self.config.placeholder)))

        text = substitute(document_text, replacements)
        report = ImportReport(
            document=str(document_path),
            tool_version=self._tool_version,
            directives=len(located),
            resolved=len(located) - len(diagnostics),
            diagnostics=diagnostics,
        )
        logger.debug(
            f"Document {document_path}: {report.resolved} of {report.directives} import(s) resolved"
        )

        if self.config.strict and not report.ok:
            raise ImportFailedError(report)

        return ProcessedDocument(text=text, report=report, imports=resolved)

    def process_file(self, document_path: Path | str) -> ProcessedDocument:
        """Read a host document and rewrite it. A failed read raises DocumentReadError."""
        document_path = Path(document_path)
        return self.process_document(document_path, read_document(document_path))

    @staticmethod
    def _diagnostic(
        document_path: Path,
        document_text: str,
        d: LocatedDirective,
        err: BookImportError,
        severity: Severity,
    ) -> Diagnostic:
        line, column = position_of(document_text, d.start)
        return Diagnostic(
            kind=err.kind,
            severity=severity,
            message=str(err),
            document=str(document_path),
            line=line,
            column=column,
            directive=d.raw,
            target=d.target_path if isinstance(d, ImportDirective) else None,
            tag=d.tag if isinstance(d, ImportDirective) else None,
        )


def process_document(
    document_path: Path | str,
    document_text: str,
    config: Optional[ImportConfig] = None,
) -> ProcessedDocument:
    """Rewrite a host document with a one-off engine."""
    return ImportEngine(config).process_document(document_path, document_text)


def process_file(document_path: Path | str, config: Optional[ImportConfig] = None) -> ProcessedDocument:
    """Read and rewrite a host document with a one-off engine."""
    return ImportEngine(config).process_file(document_path)


__all__ = [
    "ResolvedImport",
    "ProcessedDocument",
    "ImportEngine",
    "process_document",
    "process_file",
]
