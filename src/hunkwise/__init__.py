"""hunkwise: unified diff parsing, application and generation."""

from __future__ import annotations

from hunkwise.engine import apply_patch, compute_diff

__version__ = "0.1.0"

__all__ = ["__version__", "apply_patch", "compute_diff"]
