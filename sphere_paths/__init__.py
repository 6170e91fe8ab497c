"""
sphere_paths: great-arc geometry and path assembly on the unit sphere.

Subpackages:
- common/: precision context, errors, constants, partition enums, transforms, config
- geometry/: points, angular intervals, great circles, arcs and paths
- operators/: arc connector and interior-angle selection policies
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

__all__ = [
    "PrecisionContext",
    "Point2S",
    "AngularInterval",
    "GreatCircle",
    "GreatArc",
    "GreatArcPath",
    "Transform2S",
    "ArcConnector",
    "InteriorAngleArcConnector",
    "ConnectionPolicy",
]

_LAZY_ATTRS: dict[str, tuple[str, str | None]] = {
    "PrecisionContext": ("sphere_paths.common.precision", "PrecisionContext"),
    "Point2S": ("sphere_paths.geometry.point2s", "Point2S"),
    "AngularInterval": ("sphere_paths.geometry.angular_interval", "AngularInterval"),
    "GreatCircle": ("sphere_paths.geometry.great_circle", "GreatCircle"),
    "GreatArc": ("sphere_paths.geometry.great_arc", "GreatArc"),
    "GreatArcPath": ("sphere_paths.geometry.arc_path", "GreatArcPath"),
    "Transform2S": ("sphere_paths.common.transforms.rotation", "Transform2S"),
    "ArcConnector": ("sphere_paths.operators.arc_connector", "ArcConnector"),
    "InteriorAngleArcConnector": ("sphere_paths.operators.interior_angle", "InteriorAngleArcConnector"),
    "ConnectionPolicy": ("sphere_paths.operators.interior_angle", "ConnectionPolicy"),
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
