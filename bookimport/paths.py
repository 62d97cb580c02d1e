from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .errors import DocumentReadError, ImportFileNotFoundError, ImportReadError, PathEscapesProjectError


def resolve_target(
    host_document_path: Path | str,
    target_path: str,
    *,
    root: Optional[Path | str] = None,
) -> Path:
    """
    Absolute path of an import target.

    The target is relative to the directory holding the host document,
    not to the process working directory:

        book/src/intro.md + ../book.toml  →  book/book.toml

    Existence is NOT checked here; reading reports a missing file.
    With `root` set, targets outside of it are rejected.
    """
    base = Path(host_document_path).parent
    target = Path(target_path)
    candidate = target if target.is_absolute() else base / target
    resolved = Path(os.path.abspath(candidate))

    if root is not None:
        root_real = Path(root).resolve()
        real = resolved.resolve()
        if real != root_real and root_real not in real.parents:
            raise PathEscapesProjectError(str(resolved), str(root_real))

    return resolved


def read_target(path: Path) -> str:
    """Read an import target as UTF-8 text."""
    if not path.is_file():
        raise ImportFileNotFoundError(str(path))
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ImportReadError(str(path), f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise ImportReadError(str(path), e.strerror or str(e)) from e


def read_document(path: Path) -> str:
    """
    Read a host document. Any failure is fatal for that document.

    Line endings are kept as they are on disk.
    """
    try:
        with path.open(encoding="utf-8", newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise DocumentReadError(str(path), f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise DocumentReadError(str(path), e.strerror or str(e)) from e


__all__ = ["resolve_target", "read_target", "read_document"]
