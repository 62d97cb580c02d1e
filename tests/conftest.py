import textwrap
from pathlib import Path

import pytest

from tests.infrastructure.file_utils import write


LIB_RS = """\
use std::fmt;

// @book start struct
pub struct Point {
    x: i32,
    y: i32,
}
// @book end struct

fn main() {
    // @book start body
    let p = Point { x: 1, y: 2 };
    // @book end body
}
"""


@pytest.fixture
def tmpbook(tmp_path: Path) -> Path:
    """
    Minimal book:
      book/book.toml              (tag book-section)
      book/src/lib.rs             (tags struct, body)
      book/src/styles/fixture.css (tag cool-css)
    Host documents are written by the tests themselves.
    """
    root = tmp_path / "book"
    write(
        root / "book.toml",
        textwrap.dedent("""\
        [book]
        title = "Example"

        # @book start book-section
        [preprocessor.bookimport]
        command = "bookimport"
        # @book end book-section
        """),
    )
    write(root / "src" / "lib.rs", LIB_RS)
    write(
        root / "src" / "styles" / "fixture.css",
        textwrap.dedent("""\
        .hidden { display: none; }

        /* @book start cool-css */
        .this-will-be-included {
          display: block;
        }
        /* @book end cool-css */
        """),
    )
    return root


__all__ = ["LIB_RS"]
