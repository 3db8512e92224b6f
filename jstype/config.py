"""
jstype/config.py
════════════════

Checker configuration.

Values come from, in increasing precedence: the dataclass defaults, an
optional JSON configuration file, and command-line flags.

Example ``jstype.json``::

    {
        "infer": true,
        "exclude_dirs": ["node_modules", "vendor"],
        "jobs": 4
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, List, Mapping, Tuple, Union

from jstype.errors import ConfigError

_log = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: Tuple[str, ...] = (".js", ".jsx", ".mjs", ".cjs")
DEFAULT_EXCLUDE_DIRS: Tuple[str, ...] = (
    "node_modules",
    "bower_components",
    "dist",
    "build",
    "coverage",
)


@dataclass(frozen=True)
class CheckerConfig:
    """
    Tuning knobs for a checking run.

    Attributes
    ----------
    infer        : also track unannotated declarations by inferred type
    extensions   : file suffixes picked up during directory discovery
    exclude_dirs : directory names pruned during discovery (hidden
                   directories are always pruned)
    jobs         : worker count for checking files in parallel
    """
    infer: bool = False
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    exclude_dirs: Tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    jobs: int = 1

    def validate(self) -> List[str]:
        """Return a list of validation warnings (empty if valid)."""
        warnings: List[str] = []
        if self.jobs <= 0:
            warnings.append("jobs must be positive; using 1")
        if not self.extensions:
            warnings.append("no file extensions configured; directories yield no files")
        for ext in self.extensions:
            if not ext.startswith("."):
                warnings.append(f"extension {ext!r} does not start with '.'")
        return warnings

    @property
    def worker_count(self) -> int:
        return self.jobs if self.jobs > 0 else 1

    def with_overrides(self, **overrides: Any) -> "CheckerConfig":
        """Copy with every non-``None`` override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        for key in ("extensions", "exclude_dirs"):
            if key in changes:
                changes[key] = tuple(changes[key])
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], source: str = "") -> "CheckerConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown option(s): {', '.join(unknown)}", path=source)
        kwargs: dict = {}
        if "infer" in data:
            if not isinstance(data["infer"], bool):
                raise ConfigError("'infer' must be true or false", path=source)
            kwargs["infer"] = data["infer"]
        if "jobs" in data:
            if isinstance(data["jobs"], bool) or not isinstance(data["jobs"], int):
                raise ConfigError("'jobs' must be an integer", path=source)
            kwargs["jobs"] = data["jobs"]
        for key in ("extensions", "exclude_dirs"):
            if key in data:
                value = data[key]
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise ConfigError(f"'{key}' must be a list of strings", path=source)
                kwargs[key] = tuple(value)
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "CheckerConfig":
        """Load a JSON configuration file."""
        p = Path(path)
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise ConfigError("configuration file not found", path=str(p)) from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(f"invalid JSON: {exc.msg}", path=str(p),
                              line=exc.lineno, column=exc.colno) from exc
        if not isinstance(data, dict):
            raise ConfigError("configuration must be a JSON object", path=str(p))
        _log.info("Loaded configuration from %s", p)
        return cls.from_mapping(data, source=str(p))


__all__ = [
    "DEFAULT_EXTENSIONS",
    "DEFAULT_EXCLUDE_DIRS",
    "CheckerConfig",
]
