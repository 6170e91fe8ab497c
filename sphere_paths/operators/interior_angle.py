"""
Interior-angle selection policies for the arc connector.

At a junction P = incoming.end the interior angle of a candidate is

    pi - incoming.circle.angle(candidate.circle, P)

which lies in (0, 2pi]. Maximizing it keeps the region on the left of the path
as large as possible and joins touching loops into one; minimizing it splits
them into the smallest loops. Angles equal under the incoming arc's precision
are resolved in favor of the earliest registered candidate.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Union

from sphere_paths.common.constants import PI
from sphere_paths.geometry.arc_path import GreatArcPath
from sphere_paths.geometry.great_arc import GreatArc
from sphere_paths.operators.arc_connector import ArcConnector, ConnectableArc, select_first


class ConnectionPolicy(str, Enum):
    """Named selection policies, as used in configuration files."""
    FIRST = "first"
    MAXIMIZE = "maximize"
    MINIMIZE = "minimize"


def interior_angle(incoming: ConnectableArc, candidate: ConnectableArc) -> float:
    """Interior angle between incoming and candidate at incoming's end point."""
    circle = incoming.arc.circle
    return PI - circle.angle(candidate.arc.circle, incoming.end_point)


def _select(incoming: ConnectableArc, candidates: List[ConnectableArc], maximize: bool) -> ConnectableArc:
    precision = incoming.precision
    best = candidates[0]
    best_angle = interior_angle(incoming, best)
    for candidate in candidates[1:]:
        angle = interior_angle(incoming, candidate)
        better = precision.gt(angle, best_angle) if maximize else precision.lt(angle, best_angle)
        if better:
            best, best_angle = candidate, angle
    return best


def maximize_interior_angle(incoming: ConnectableArc, candidates: List[ConnectableArc]) -> ConnectableArc:
    return _select(incoming, candidates, maximize=True)


def minimize_interior_angle(incoming: ConnectableArc, candidates: List[ConnectableArc]) -> ConnectableArc:
    return _select(incoming, candidates, maximize=False)


class InteriorAngleArcConnector(ArcConnector):
    """
    Arc connector that resolves ambiguous junctions by interior angle.

    Args:
        maximize: Choose the largest interior angle if True, else the smallest
    """

    def __init__(self, maximize: bool = True):
        super().__init__(maximize_interior_angle if maximize else minimize_interior_angle)
        self._maximize = maximize

    @property
    def is_maximizing(self) -> bool:
        return self._maximize

    @classmethod
    def maximize(cls) -> "InteriorAngleArcConnector":
        return cls(maximize=True)

    @classmethod
    def minimize(cls) -> "InteriorAngleArcConnector":
        return cls(maximize=False)


def connect_maximized(arcs: Union[GreatArc, Iterable[GreatArc]]) -> List[GreatArcPath]:
    """Connect arcs in one shot, maximizing interior angles."""
    return InteriorAngleArcConnector.maximize().connect_all(arcs)


def connect_minimized(arcs: Union[GreatArc, Iterable[GreatArc]]) -> List[GreatArcPath]:
    """Connect arcs in one shot, minimizing interior angles."""
    return InteriorAngleArcConnector.minimize().connect_all(arcs)


def connector_for_policy(policy: Union[ConnectionPolicy, str, None]) -> ArcConnector:
    """
    Build a connector for a named policy.

    Raises:
        ValueError: If the policy name is unknown
    """
    policy = ConnectionPolicy(policy or ConnectionPolicy.FIRST)
    if policy == ConnectionPolicy.MAXIMIZE:
        return InteriorAngleArcConnector.maximize()
    if policy == ConnectionPolicy.MINIMIZE:
        return InteriorAngleArcConnector.minimize()
    return ArcConnector(select_first)
