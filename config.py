"""Load benchmark parameters from pyproject.toml and optional .normbench.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from errors import InvalidInputError
from generators import check_seed
from histogram import DEFAULT_BINS, DEFAULT_HEIGHT


@dataclass(frozen=True)
class BenchmarkConfig:
    """Parameters shared by every generator in one run."""

    # Number of normal samples drawn per generator
    samples: int = 1_000_000
    # Seed given to every generator
    seed: int = 42
    # Histogram columns
    bins: int = DEFAULT_BINS
    # Histogram rows above the axis
    height: int = DEFAULT_HEIGHT

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidInputError(f"{f.name} must be an integer, got {value!r}")
        for name in ("samples", "bins", "height"):
            if getattr(self, name) < 1:
                raise InvalidInputError(f"{name} must be positive, got {getattr(self, name)}")
        check_seed(self.seed)


def _read_toml(path: Path) -> dict:
    """Read a TOML file; return empty dict if missing or unparseable."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError, UnicodeDecodeError):
        return {}


def _known(d: dict) -> dict:
    """Keep only keys that are BenchmarkConfig fields."""
    valid = {f.name for f in fields(BenchmarkConfig)}
    return {key: val for key, val in d.items() if key in valid}


def load_config(project_root: Optional[Path] = None) -> BenchmarkConfig:
    """Load config from pyproject.toml [tool.normbench], then .normbench.toml."""
    if project_root is None:
        project_root = Path.cwd()
    values: dict = {}
    pyproject = _read_toml(project_root / "pyproject.toml")
    values.update(_known(pyproject.get("tool", {}).get("normbench", {})))
    values.update(_known(_read_toml(project_root / ".normbench.toml")))
    return BenchmarkConfig(**values)
