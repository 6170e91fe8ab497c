"""
Arc connector: assemble unordered great arcs into ordered paths.

Arcs are wrapped in ConnectableArc records held in an arena (a list indexed by
registration order). Each record gets at most one successor; successor links
are made by tolerant endpoint matching and, where several arcs could follow,
by an injected selection policy.

Algorithm per incoming arc with an end point:
1. Candidates are the other records that have a start point, no predecessor,
   and whose start equals the incoming end under the candidate's precision.
   They are listed in registration order.
2. Point-like candidates (end point equal to the incoming end under the
   incoming precision) take priority and are resolved here, never by the
   policy: unconnected first, then nearest end point, then smallest angle
   between circles, then lowest index.
3. Otherwise one candidate is linked directly and several go to the policy.

connect_all() links whatever is still unlinked, exports one path per chain
(walking back to the chain root, or the record itself for loops) in
registration order, and resets the connector.

Candidate lookup uses a scipy KDTree over start-point unit vectors, queried
with the largest epsilon in the working set (chord length <= angle), and every
hit is then checked with the exact precision test.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Callable, Iterable, List, Optional, Union

import numpy as np
from scipy.spatial import KDTree

from sphere_paths.common.errors import ConnectorInvariantError
from sphere_paths.common.precision import PrecisionContext
from sphere_paths.geometry.arc_path import GreatArcPath
from sphere_paths.geometry.great_arc import GreatArc
from sphere_paths.geometry.point2s import Point2S

_logger = logging.getLogger(__name__)

# Relative slack on the KDTree query radius; exact matching happens afterwards.
_QUERY_RADIUS_SLACK: float = 1e-9


# =============================================================================
# Arena record
# =============================================================================


@dataclass(eq=False)
class ConnectableArc:
    """
    Arc plus its connection state inside one connector.

    Attributes:
        index: Registration index (position in the connector's arena)
        arc: Wrapped arc
        next: Arena index of the successor, or None
        previous: Arena index of the predecessor, or None
        exported: True once the record has been written to a path
    """
    index: int
    arc: GreatArc
    next: Optional[int] = None
    previous: Optional[int] = None
    exported: bool = False

    @property
    def start_point(self) -> Optional[Point2S]:
        return self.arc.start_point

    @property
    def end_point(self) -> Optional[Point2S]:
        return self.arc.end_point

    @property
    def precision(self) -> PrecisionContext:
        return self.arc.precision

    def has_start(self) -> bool:
        return self.arc.start_point is not None

    def has_end(self) -> bool:
        return self.arc.end_point is not None

    def has_next(self) -> bool:
        return self.next is not None

    def has_previous(self) -> bool:
        return self.previous is not None

    def can_connect_to(self, candidate: "ConnectableArc") -> bool:
        """True if candidate starts where this arc ends, under the candidate's precision."""
        end = self.end_point
        start = candidate.start_point
        return end is not None and start is not None and start.eq(end, candidate.precision)

    def end_points_eq(self, candidate: "ConnectableArc") -> bool:
        """True if both arcs end at the same point under this arc's precision."""
        end = self.end_point
        other = candidate.end_point
        return end is not None and other is not None and end.eq(other, self.precision)

    def relative_angle(self, candidate: "ConnectableArc") -> float:
        return self.arc.circle.angle(candidate.arc.circle)


SelectConnection = Callable[[ConnectableArc, List[ConnectableArc]], ConnectableArc]


def select_first(incoming: ConnectableArc, candidates: List[ConnectableArc]) -> ConnectableArc:
    """Policy that takes the earliest registered candidate."""
    return candidates[0]


# =============================================================================
# Connection report
# =============================================================================


@dataclass
class ConnectReport:
    """
    Summary of one connect_all() run.

    Attributes:
        arcs_in: Number of arcs exported
        paths_out: Number of paths produced
        closed_paths: Number of closed paths
        full_arcs: Number of full arcs (always single-arc paths)
        ambiguous_junctions: Junctions resolved by the selection policy
        point_like_junctions: Junctions resolved by the point-like rule
        timestamp: Wall-clock time of the export
    """
    arcs_in: int = 0
    paths_out: int = 0
    closed_paths: int = 0
    full_arcs: int = 0
    ambiguous_junctions: int = 0
    point_like_junctions: int = 0
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)


# =============================================================================
# Connector
# =============================================================================


class ArcConnector:
    """
    Connects great arcs into paths.

    Args:
        select_connection: Policy called with (incoming, candidates) when more
            than one non point-like arc can follow incoming. It must return one
            of the candidates. Defaults to select_first.

    Not thread-safe. connect_all() is the only reset.
    """

    def __init__(self, select_connection: Optional[SelectConnection] = None):
        self._select_connection: SelectConnection = select_connection or select_first
        self._arena: List[ConnectableArc] = []
        self._tree: Optional[KDTree] = None
        self._tree_indices: List[int] = []
        self._query_radius: float = 0.0
        self._ambiguous = 0
        self._point_like = 0
        self.last_report: Optional[ConnectReport] = None

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def add(self, arcs: Union[GreatArc, Iterable[GreatArc]]) -> None:
        """Register arcs without connecting them."""
        self._register(arcs)

    def connect(self, arcs: Union[GreatArc, Iterable[GreatArc]]) -> None:
        """
        Register arcs and link each new one forward, in registration order.

        Links made here are kept by later calls. The start-point index is
        rebuilt on the first lookup after arcs with start points were added, so
        many small batches each pay for one rebuild; prefer add() followed by
        connect_all() for bulk input.
        """
        for record in self._register(arcs):
            if not record.has_next():
                self._make_forward_connection(record)

    def connect_all(self, arcs: Optional[Union[GreatArc, Iterable[GreatArc]]] = None) -> List[GreatArcPath]:
        """
        Connect every registered arc and return the resulting paths.

        Args:
            arcs: Optional arcs to register first

        Returns:
            One path per connected chain, in registration order of the chains

        Raises:
            ConnectorInvariantError: If the policy returned a non-candidate or
                an arc ended up in no path
        """
        if arcs is not None:
            self._register(arcs)

        try:
            for record in self._arena:
                self._follow_forward_connections(record)

            report = ConnectReport(
                ambiguous_junctions=self._ambiguous,
                point_like_junctions=self._point_like,
            )
            paths: List[GreatArcPath] = []
            for record in self._arena:
                root = self._export_path(record)
                if root is not None:
                    path = self._to_path(root)
                    paths.append(path)
                    report.arcs_in += len(path)
                    report.closed_paths += int(path.is_closed())
                    report.full_arcs += sum(1 for arc in path if arc.is_full())

            if report.arcs_in != len(self._arena):
                raise ConnectorInvariantError(
                    f"Exported {report.arcs_in} of {len(self._arena)} registered arcs"
                )
            report.paths_out = len(paths)
            self.last_report = report
            _logger.debug(
                f"connect_all: {report.arcs_in} arcs -> {report.paths_out} paths "
                f"({report.closed_paths} closed, {report.ambiguous_junctions} ambiguous, "
                f"{report.point_like_junctions} point-like)"
            )
            return paths
        finally:
            self._reset()

    def __len__(self) -> int:
        return len(self._arena)

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def _register(self, arcs: Union[GreatArc, Iterable[GreatArc]]) -> List[ConnectableArc]:
        if isinstance(arcs, GreatArc):
            arcs = [arcs]
        added = []
        for arc in arcs:
            record = ConnectableArc(index=len(self._arena), arc=arc)
            self._arena.append(record)
            added.append(record)
        if any(r.has_start() for r in added):
            self._tree = None
        return added

    def _reset(self) -> None:
        self._arena = []
        self._tree = None
        self._tree_indices = []
        self._query_radius = 0.0
        self._ambiguous = 0
        self._point_like = 0

    # -------------------------------------------------------------------------
    # Linking
    # -------------------------------------------------------------------------

    def _follow_forward_connections(self, record: ConnectableArc) -> None:
        current = record
        while current is not None and current.has_end() and not current.has_next():
            current = self._make_forward_connection(current)

    def _make_forward_connection(self, incoming: ConnectableArc) -> Optional[ConnectableArc]:
        point_like, others = self._find_candidates(incoming)

        chosen: Optional[ConnectableArc] = None
        if point_like:
            chosen = point_like[0] if len(point_like) == 1 else self._select_point_connection(incoming, point_like)
        elif len(others) == 1:
            chosen = others[0]
        elif others:
            chosen = self._select_connection(incoming, list(others))
            if not any(chosen is c for c in others):
                raise ConnectorInvariantError(
                    f"Selection policy returned {chosen!r}, which is not one of the "
                    f"{len(others)} candidates for arc {incoming.index}"
                )
            self._ambiguous += 1
            _logger.debug(
                f"Arc {incoming.index}: {len(others)} candidates "
                f"{[c.index for c in others]} -> chose {chosen.index}"
            )

        if chosen is not None:
            incoming.next = chosen.index
            chosen.previous = incoming.index
        return chosen

    def _find_candidates(self, incoming: ConnectableArc):
        point_like: List[ConnectableArc] = []
        others: List[ConnectableArc] = []
        end = incoming.end_point
        if end is None:
            return point_like, others

        for idx in self._nearby_starts(end):
            candidate = self._arena[idx]
            if candidate is incoming or candidate.has_previous() or not candidate.has_start():
                continue
            if not incoming.can_connect_to(candidate):
                continue
            if incoming.end_points_eq(candidate):
                point_like.append(candidate)
            else:
                others.append(candidate)
        return point_like, others

    def _select_point_connection(self, incoming: ConnectableArc,
                                 candidates: List[ConnectableArc]) -> ConnectableArc:
        """
        Choose among candidates that end where incoming ends.

        Candidates without a successor win over connected ones even when they
        lie farther away, so a chain that is already continued is not
        shortened. Ties fall to the smaller end distance, then the smaller
        angle between the circles, then the lower index.
        """
        end = incoming.end_point

        def key(candidate: ConnectableArc):
            return (
                candidate.has_next(),
                candidate.end_point.distance(end),
                abs(incoming.relative_angle(candidate)),
                candidate.index,
            )

        best = candidates[0]
        best_key = key(best)
        for candidate in candidates[1:]:
            cand_key = key(candidate)
            if self._point_key_less(cand_key, best_key, incoming.precision.tighter(candidate.precision)):
                best, best_key = candidate, cand_key

        self._point_like += 1
        _logger.debug(
            f"Arc {incoming.index}: {len(candidates)} point-like candidates "
            f"{[c.index for c in candidates]} -> chose {best.index}"
        )
        return best

    @staticmethod
    def _point_key_less(a, b, precision: PrecisionContext) -> bool:
        # connected flag, then end distance and angle under precision, then index
        if a[0] != b[0]:
            return not a[0]
        for x, y in ((a[1], b[1]), (a[2], b[2])):
            cmp = precision.compare(x, y)
            if cmp != 0:
                return cmp < 0
        return a[3] < b[3]

    # -------------------------------------------------------------------------
    # Spatial lookup
    # -------------------------------------------------------------------------

    def _nearby_starts(self, point: Point2S) -> List[int]:
        """Arena indices whose start point may match point, in registration order."""
        if self._tree is None:
            self._build_tree()
        if self._tree is None:
            return []
        hits = self._tree.query_ball_point(point.vector, self._query_radius)
        return sorted(self._tree_indices[h] for h in hits)

    def _build_tree(self) -> None:
        indices = [r.index for r in self._arena if r.has_start()]
        self._tree_indices = indices
        if not indices:
            self._tree = None
            return
        starts = np.array([self._arena[i].start_point.vector for i in indices], dtype=float)
        max_eps = max(self._arena[i].precision.epsilon for i in indices)
        self._query_radius = max_eps * (1.0 + _QUERY_RADIUS_SLACK) + np.finfo(float).eps * 4.0
        self._tree = KDTree(starts)

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def _export_path(self, record: ConnectableArc) -> Optional[ConnectableArc]:
        if record.exported:
            return None
        record.exported = True
        root = record

        current = self._at(record.next)
        while current is not None and not current.exported:
            current.exported = True
            current = self._at(current.next)

        current = self._at(record.previous)
        while current is not None and not current.exported:
            current.exported = True
            root = current
            current = self._at(current.previous)

        return root

    def _to_path(self, root: ConnectableArc) -> GreatArcPath:
        arcs = [root.arc]
        current = self._at(root.next)
        while current is not None and current is not root:
            arcs.append(current.arc)
            current = self._at(current.next)
        # links were validated with per-candidate precision; no re-check here
        return GreatArcPath(arcs)

    def _at(self, index: Optional[int]) -> Optional[ConnectableArc]:
        return None if index is None else self._arena[index]
