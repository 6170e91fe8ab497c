"""
Common package for sphere_paths.

Shared utilities used by the geometry and operator packages.

Subpackages:
- transforms/: orthogonal transforms of the sphere
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "PrecisionContext",
    "Split",
    "constants",
    "errors",
]

_LAZY_ATTRS: dict[str, tuple[str, str | None]] = {
    "PrecisionContext": ("sphere_paths.common.precision", "PrecisionContext"),
    "Split": ("sphere_paths.common.partition", "Split"),
    # Expose these as submodules, but do not eagerly import them at package import time.
    "constants": ("sphere_paths.common.constants", None),
    "errors": ("sphere_paths.common.errors", None),
}


def __getattr__(name: str) -> Any:
    target = _LAZY_ATTRS.get(name)
    if target is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module_name, attr_name = target
    module = import_module(module_name)
    return module if attr_name is None else getattr(module, attr_name)


def __dir__() -> list[str]:
    return sorted(set(globals().keys()) | set(_LAZY_ATTRS.keys()))
