"""
Engine configuration.

Optional YAML file (bookimport.yaml) next to the book:

    directive_keyword: bookimport
    marker_keyword: "@book"
    placeholder: "**[bookimport error: {message}]**"
    strict: false
    workers: 4
    restrict_to_root: true
    root: .
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from ruamel.yaml import YAML

from .diagnostics import DEFAULT_PLACEHOLDER
from .syntax import DEFAULT_DIRECTIVE_KEYWORD, DEFAULT_ESCAPE_CHAR, DEFAULT_MARKER_KEYWORD, ImportSyntax

CONFIG_FILE = "bookimport.yaml"

_yaml = YAML(typ="safe")


class ConfigError(ValueError):
    """Invalid configuration file or value."""
    pass


def _assert_only_keys(d: Dict[str, Any], allowed: Iterable[str], *, ctx: str) -> None:
    extra = set(d.keys()) - set(allowed)
    if extra:
        raise ConfigError(f"{ctx}: unknown key(s): {', '.join(sorted(extra))}")


def _str(d: Dict[str, Any], key: str, default: str) -> str:
    val = d.get(key, default)
    if not isinstance(val, str):
        raise ConfigError(f"ImportConfig.{key} must be a string, got {type(val).__name__}")
    return val


def _bool(d: Dict[str, Any], key: str, default: bool) -> bool:
    val = d.get(key, default)
    if not isinstance(val, bool):
        raise ConfigError(f"ImportConfig.{key} must be a boolean, got {val!r}")
    return val


@dataclass
class ImportConfig:
    directive_keyword: str = DEFAULT_DIRECTIVE_KEYWORD
    marker_keyword: str = DEFAULT_MARKER_KEYWORD
    escape_char: str = DEFAULT_ESCAPE_CHAR
    # inline text for failed directives
    placeholder: str = DEFAULT_PLACEHOLDER
    # raise ImportFailedError after a document with failures
    strict: bool = False
    # >1 resolves directives on a thread pool
    workers: int = 1
    # reject targets outside of root
    restrict_to_root: bool = False
    root: Optional[Path] = None

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]], *, base_dir: Optional[Path] = None) -> ImportConfig:
        if not d:
            return ImportConfig()
        if not isinstance(d, dict):
            raise ConfigError("ImportConfig must be a mapping")
        _assert_only_keys(
            d,
            [
                "directive_keyword", "marker_keyword", "escape_char",
                "placeholder", "strict", "workers",
                "restrict_to_root", "root",
            ],
            ctx="ImportConfig",
        )

        workers = d.get("workers", 1)
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise ConfigError(f"ImportConfig.workers must be a positive integer, got {workers!r}")

        root_raw = d.get("root")
        root: Optional[Path] = None
        if root_raw is not None:
            if not isinstance(root_raw, str):
                raise ConfigError("ImportConfig.root must be a string path")
            root = Path(root_raw)
            if base_dir is not None and not root.is_absolute():
                root = base_dir / root

        cfg = ImportConfig(
            directive_keyword=_str(d, "directive_keyword", DEFAULT_DIRECTIVE_KEYWORD),
            marker_keyword=_str(d, "marker_keyword", DEFAULT_MARKER_KEYWORD),
            escape_char=_str(d, "escape_char", DEFAULT_ESCAPE_CHAR),
            placeholder=_str(d, "placeholder", DEFAULT_PLACEHOLDER),
            strict=_bool(d, "strict", False),
            workers=workers,
            restrict_to_root=_bool(d, "restrict_to_root", False),
            root=root,
        )
        if cfg.restrict_to_root and cfg.root is None:
            raise ConfigError("ImportConfig.restrict_to_root requires 'root'")
        # validate keywords early
        try:
            cfg.syntax
        except ValueError as e:
            raise ConfigError(str(e)) from e
        return cfg

    @property
    def syntax(self) -> ImportSyntax:
        return ImportSyntax(
            directive_keyword=self.directive_keyword,
            marker_keyword=self.marker_keyword,
            escape_char=self.escape_char,
        )

    @property
    def effective_root(self) -> Optional[Path]:
        """Root used for the path hardening, or None when disabled."""
        return self.root if self.restrict_to_root else None


def _read_yaml_map(path: Path) -> dict:
    """Reads a YAML file into a dict."""
    if not path.is_file():
        return {}
    raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_config(path: Path) -> ImportConfig:
    """
    Load configuration from a YAML file.

    A missing file gives the default configuration. Relative 'root' is
    taken relative to the file's directory.
    """
    return ImportConfig.from_dict(_read_yaml_map(path), base_dir=path.parent)


def find_config(start_dir: Path) -> Optional[Path]:
    """Nearest bookimport.yaml in start_dir or one of its parents."""
    cur = start_dir.resolve()
    for d in (cur, *cur.parents):
        candidate = d / CONFIG_FILE
        if candidate.is_file():
            return candidate
    return None


__all__ = ["CONFIG_FILE", "ConfigError", "ImportConfig", "load_config", "find_config"]
