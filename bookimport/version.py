from __future__ import annotations

from importlib import metadata


def tool_version() -> str:
    """
    Version of the installed package.
    Has no dependencies on other modules (avoids import cycles).
    """
    try:
        return metadata.version("bookimport")
    except metadata.PackageNotFoundError:
        return "0.0.0"

__all__ = ["tool_version"]
