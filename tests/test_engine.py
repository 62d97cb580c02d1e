import logging
import textwrap
from pathlib import Path

import pytest

from bookimport import (
    DocumentReadError,
    ImportConfig,
    ImportEngine,
    ImportFailedError,
    Severity,
    process_document,
    process_file,
)
from tests.infrastructure.file_utils import annotated, write, write_annotated


INTRO = textwrap.dedent("""\
    # Intro

    {{#bookimport ../book.toml@book-section}}

    ```rust
    {{#bookimport lib.rs@struct}}
    ```
    """)

INTRO_EXPECTED = textwrap.dedent("""\
    # Intro

    [preprocessor.bookimport]
    command = "bookimport"

    ```rust
    pub struct Point {
        x: i32,
        y: i32,
    }
    ```
    """)


def test_two_directives_from_two_files(tmpbook: Path):
    res = process_document(tmpbook / "src" / "intro.md", INTRO)
    assert res.text == INTRO_EXPECTED
    assert res.report.ok
    assert res.report.directives == 2
    assert res.report.resolved == 2
    assert [i.ok for i in res.imports] == [True, True]


def test_import_from_subdirectory_with_dot_prefix(tmpbook: Path):
    doc = "```css\n{{#bookimport ./styles/fixture.css@cool-css }}\n```\n"
    res = process_document(tmpbook / "src" / "css.md", doc)
    assert res.text == "```css\n.this-will-be-included {\n  display: block;\n}\n```\n"


def test_document_without_directives_is_unchanged(tmpbook: Path):
    doc = "plain {{#include x.rs}}\r\ntext\n\n"
    res = process_document(tmpbook / "src" / "plain.md", doc)
    assert res.text == doc
    assert res.report.directives == 0
    assert res.report.ok


def test_escaped_directive_is_left_verbatim(tmpbook: Path):
    doc = "/{{#bookimport lib.rs@struct}}\n"
    res = process_document(tmpbook / "src" / "escaped.md", doc)
    assert res.text == doc
    assert res.report.directives == 0


def test_missing_file_becomes_placeholder_and_others_resolve(tmpbook: Path, caplog):
    doc = "{{#bookimport lib.rs@body}}\nx {{#bookimport missing.rs@x}}\n{{#bookimport lib.rs@struct}}\n"
    with caplog.at_level(logging.WARNING, logger="bookimport"):
        res = process_document(tmpbook / "src" / "broken.md", doc)

    lines = res.text.splitlines()
    assert lines[0] == "    let p = Point { x: 1, y: 2 };"
    assert lines[1].startswith("x **[bookimport error: File not found: ")
    assert "missing.rs" in lines[1]
    assert lines[2] == "pub struct Point {"

    report = res.report
    assert not report.ok
    assert report.directives == 3
    assert report.resolved == 2
    (diag,) = report.diagnostics
    assert diag.kind == "file-not-found"
    assert (diag.line, diag.column) == (2, 3)
    assert diag.directive == "{{#bookimport missing.rs@x}}"
    assert diag.target == "missing.rs"
    assert diag.tag == "x"
    assert "file-not-found" in caplog.text


def test_missing_tag_reports_available_tags(tmpbook: Path):
    res = process_document(tmpbook / "src" / "t.md", "{{#bookimport lib.rs@nope}}")
    (diag,) = res.report.diagnostics
    assert diag.kind == "tag-not-found"
    assert "Available: body, struct" in diag.message
    assert res.text.startswith("**[bookimport error: Tag 'nope' not found")


def test_malformed_directive_gets_placeholder(tmpbook: Path):
    res = process_document(tmpbook / "src" / "m.md", "a {{#bookimport lib.rs}} b")
    (diag,) = res.report.diagnostics
    assert diag.kind == "malformed-directive"
    assert diag.target is None
    assert res.text.startswith("a **[bookimport error: Malformed directive ")
    assert res.text.endswith("]** b")


def test_unbalanced_markers_in_target(tmp_path: Path):
    write(tmp_path / "code.py", "# @book start t\nx = 1\n")
    res = process_document(tmp_path / "doc.md", "{{#bookimport code.py@t}}")
    assert res.report.diagnostics[0].kind == "unterminated-tag"
    assert "x = 1" not in res.text


def test_custom_placeholder(tmpbook: Path):
    cfg = ImportConfig(placeholder="<!-- {kind}: {target}@{tag} -->")
    res = process_document(tmpbook / "src" / "p.md", "{{#bookimport nope.rs@t}}", cfg)
    assert res.text == "<!-- file-not-found: nope.rs@t -->"


def test_strict_mode_raises_with_report(tmpbook: Path):
    cfg = ImportConfig(strict=True)
    with pytest.raises(ImportFailedError) as ei:
        process_document(tmpbook / "src" / "s.md", "{{#bookimport lib.rs@struct}} {{#bookimport nope.rs@t}}", cfg)
    report = ei.value.report
    assert report.failed == 1
    assert report.resolved == 1
    assert "nope.rs" in str(ei.value)


def test_strict_mode_passes_clean_documents(tmpbook: Path):
    res = process_document(tmpbook / "src" / "intro.md", INTRO, ImportConfig(strict=True))
    assert res.text == INTRO_EXPECTED


def test_parallel_resolution_keeps_document_order(tmp_path: Path):
    for i in range(12):
        write_annotated(tmp_path / f"f{i}.rs", annotated(f"t{i}", [f"value {i}"]))
    doc = "\n".join(f"{{{{#bookimport f{i}.rs@t{i}}}}}" for i in range(12)) + "\n{{#bookimport f99.rs@t}}\n"

    serial = process_document(tmp_path / "doc.md", doc)
    parallel = process_document(tmp_path / "doc.md", doc, ImportConfig(workers=4))

    assert parallel.text == serial.text
    assert parallel.report.model_dump() == serial.report.model_dump()
    assert serial.text.splitlines()[:12] == [f"value {i}" for i in range(12)]


def test_target_is_read_again_for_every_document(tmp_path: Path):
    write_annotated(tmp_path / "a.rs", annotated("t", ["old"]))
    engine = ImportEngine()
    assert engine.process_document(tmp_path / "doc.md", "{{#bookimport a.rs@t}}").text == "old"
    write_annotated(tmp_path / "a.rs", annotated("t", ["new"]))
    assert engine.process_document(tmp_path / "doc.md", "{{#bookimport a.rs@t}}").text == "new"


def test_crlf_document_keeps_its_line_endings(tmpbook: Path):
    doc = "a\r\n{{#bookimport lib.rs@body}}\r\nb\r\n"
    res = process_document(tmpbook / "src" / "crlf.md", doc)
    assert res.text == "a\r\n    let p = Point { x: 1, y: 2 };\r\nb\r\n"


def test_root_hardening(tmpbook: Path, tmp_path: Path):
    write_annotated(tmp_path / "outside.rs", annotated("t", ["secret"]))
    cfg = ImportConfig(restrict_to_root=True, root=tmpbook)
    res = process_document(tmpbook / "src" / "r.md", "{{#bookimport ../../outside.rs@t}}", cfg)
    assert res.report.diagnostics[0].kind == "path-escapes-project"
    assert "secret" not in res.text

    # without hardening the same import resolves
    assert process_document(tmpbook / "src" / "r.md", "{{#bookimport ../../outside.rs@t}}").text == "secret"


def test_custom_keywords(tmp_path: Path):
    write(tmp_path / "a.sql", "-- @snip start q\nSELECT 1;\n-- @snip end q\n")
    cfg = ImportConfig(directive_keyword="snippet", marker_keyword="@snip")
    res = process_document(tmp_path / "doc.md", "{{#snippet a.sql@q}} {{#bookimport a.sql@q}}", cfg)
    assert res.text == "SELECT 1; {{#bookimport a.sql@q}}"


def test_process_file(tmpbook: Path):
    write(tmpbook / "src" / "intro.md", INTRO)
    res = process_file(tmpbook / "src" / "intro.md")
    assert res.text == INTRO_EXPECTED
    assert res.report.document == str(tmpbook / "src" / "intro.md")
    # the document on disk is not modified
    assert (tmpbook / "src" / "intro.md").read_text(encoding="utf-8") == INTRO


def test_process_file_keeps_crlf_line_endings(tmp_path: Path):
    write_annotated(tmp_path / "a.rs", annotated("t", ["x"]))
    doc = tmp_path / "doc.md"
    doc.write_bytes(b"head\r\n{{#bookimport a.rs@t}}\r\ntail\r\n")
    assert process_file(doc).text == "head\r\nx\r\ntail\r\n"


def test_process_file_keeps_lone_cr(tmp_path: Path):
    write_annotated(tmp_path / "a.rs", annotated("t", ["x"]))
    doc = tmp_path / "doc.md"
    doc.write_bytes(b"a\rb {{#bookimport a.rs@t}}\r")
    assert process_file(doc).text == "a\rb x\r"


def test_severity_follows_strict_mode(tmpbook: Path):
    doc = "{{#bookimport nope.rs@t}}"
    res = process_document(tmpbook / "src" / "w.md", doc)
    assert res.report.diagnostics[0].severity is Severity.warn
    with pytest.raises(ImportFailedError) as ei:
        process_document(tmpbook / "src" / "w.md", doc, ImportConfig(strict=True))
    assert ei.value.report.diagnostics[0].severity is Severity.error


def test_process_file_unreadable_document(tmp_path: Path):
    with pytest.raises(DocumentReadError):
        process_file(tmp_path / "missing.md")
