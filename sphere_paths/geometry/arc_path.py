"""
Connected sequences of great arcs.

A GreatArcPath is an immutable tuple of arcs where each arc ends where the next
one starts (under the earlier arc's precision). Paths are produced by the arc
connector and by GreatArcPath.Builder.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from sphere_paths.common.errors import PathConstructionError
from sphere_paths.common.precision import PrecisionContext
from sphere_paths.geometry.great_arc import GreatArc
from sphere_paths.geometry.point2s import Point2S


class GreatArcPath:
    """
    Ordered, connected arcs on the sphere.

    Attributes:
        arcs: Tuple of arcs in path order
    """

    __slots__ = ("_arcs",)

    def __init__(self, arcs: Iterable[GreatArc] = ()):
        self._arcs: Tuple[GreatArc, ...] = tuple(arcs)

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @classmethod
    def empty(cls) -> "GreatArcPath":
        return _EMPTY

    @classmethod
    def from_arcs(cls, arcs: Iterable[GreatArc]) -> "GreatArcPath":
        """
        Build a path from connected arcs.

        Raises:
            PathConstructionError: If consecutive arcs are not connected
        """
        builder = cls.builder()
        for arc in arcs:
            builder.append(arc)
        return builder.build()

    @classmethod
    def from_vertices(cls, vertices: Sequence[Point2S], precision: PrecisionContext,
                      close: bool = False) -> "GreatArcPath":
        """
        Build a path through the given vertices; consecutive duplicates are skipped.

        Raises:
            PathConstructionError: If only a single distinct vertex is given
            DegenerateGeometryError: If consecutive vertices are antipodal
        """
        builder = cls.builder(precision)
        builder.append_vertices(vertices)
        return builder.close() if close else builder.build()

    @classmethod
    def from_vertex_loop(cls, vertices: Sequence[Point2S], precision: PrecisionContext) -> "GreatArcPath":
        return cls.from_vertices(vertices, precision, close=True)

    @classmethod
    def builder(cls, precision: Optional[PrecisionContext] = None) -> "GreatArcPath.Builder":
        return cls.Builder(precision)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def arcs(self) -> Tuple[GreatArc, ...]:
        return self._arcs

    @property
    def start_arc(self) -> Optional[GreatArc]:
        return self._arcs[0] if self._arcs else None

    @property
    def end_arc(self) -> Optional[GreatArc]:
        return self._arcs[-1] if self._arcs else None

    @property
    def start_vertex(self) -> Optional[Point2S]:
        arc = self.start_arc
        return None if arc is None else arc.start_point

    @property
    def end_vertex(self) -> Optional[Point2S]:
        arc = self.end_arc
        return None if arc is None else arc.end_point

    @property
    def vertices(self) -> List[Point2S]:
        """
        Start vertex followed by the end vertex of every arc.

        A closed path therefore repeats its first vertex at the end. Full arcs
        contribute no vertices.
        """
        result: List[Point2S] = []
        if not self._arcs:
            return result
        start = self._arcs[0].start_point
        if start is not None:
            result.append(start)
        for arc in self._arcs:
            end = arc.end_point
            if end is not None:
                result.append(end)
        return result

    def is_empty(self) -> bool:
        return not self._arcs

    def is_closed(self) -> bool:
        end_arc = self.end_arc
        if end_arc is None:
            return False
        start = self.start_vertex
        end = self.end_vertex
        return start is not None and end is not None and start.eq(end, end_arc.precision)

    # -------------------------------------------------------------------------
    # Derived paths
    # -------------------------------------------------------------------------

    def reverse(self) -> "GreatArcPath":
        return GreatArcPath(arc.reverse() for arc in reversed(self._arcs))

    def transform(self, transform) -> "GreatArcPath":
        return GreatArcPath(arc.transform(transform) for arc in self._arcs)

    def __iter__(self) -> Iterator[GreatArc]:
        return iter(self._arcs)

    def __len__(self) -> int:
        return len(self._arcs)

    def __repr__(self) -> str:
        if not self._arcs:
            return "GreatArcPath[empty]"
        if self.start_vertex is None:
            return f"GreatArcPath[arcs={list(self._arcs)!r}]"
        return f"GreatArcPath[vertices={self.vertices!r}]"

    # =========================================================================
    # Builder
    # =========================================================================

    class Builder:
        """
        Incremental path construction from arcs and vertices.

        Points are joined to the current start or end vertex with the shortest
        arc, using the builder's precision. Appended and prepended arcs must
        connect to the current end and start arcs respectively.
        """

        def __init__(self, precision: Optional[PrecisionContext] = None):
            self.precision = precision
            self._appended: List[GreatArc] = []
            self._prepended: List[GreatArc] = []
            self._start_vertex: Optional[Point2S] = None
            self._end_vertex: Optional[Point2S] = None
            self._end_precision: Optional[PrecisionContext] = None

        @property
        def start_arc(self) -> Optional[GreatArc]:
            if self._prepended:
                return self._prepended[-1]
            return self._appended[0] if self._appended else None

        @property
        def end_arc(self) -> Optional[GreatArc]:
            if self._appended:
                return self._appended[-1]
            return self._prepended[0] if self._prepended else None

        def append(self, item: Union[GreatArc, Point2S]) -> "GreatArcPath.Builder":
            """
            Add an arc or vertex at the end of the path.

            Raises:
                PathConstructionError: If the arc does not start at the current
                    end, or a vertex follows a full arc
            """
            if isinstance(item, GreatArc):
                self._validate_connected(self.end_arc, item)
                self._append_arc(item)
                return self

            precision = self._point_precision()
            if self._end_vertex is None:
                end = self.end_arc
                if end is not None:
                    raise PathConstructionError(f"Cannot add point {item} after full arc: {end}")
                self._start_vertex = item
                self._end_vertex = item
                self._end_precision = precision
            elif not self._end_vertex.eq(item, self._end_precision):
                self._append_arc(GreatArc.from_points(self._end_vertex, item, self._end_precision))
            return self

        def prepend(self, item: Union[GreatArc, Point2S]) -> "GreatArcPath.Builder":
            """
            Add an arc or vertex at the start of the path.

            Raises:
                PathConstructionError: If the arc does not end at the current
                    start, or a vertex precedes a full arc
            """
            if isinstance(item, GreatArc):
                self._validate_connected(item, self.start_arc)
                self._prepend_arc(item)
                return self

            precision = self._point_precision()
            if self._start_vertex is None:
                start = self.start_arc
                if start is not None:
                    raise PathConstructionError(f"Cannot add point {item} before full arc: {start}")
                self._start_vertex = item
                self._end_vertex = item
                self._end_precision = precision
            elif not item.eq(self._start_vertex, precision):
                self._prepend_arc(GreatArc.from_points(item, self._start_vertex, precision))
            return self

        def append_vertices(self, vertices: Iterable[Point2S]) -> "GreatArcPath.Builder":
            for vertex in vertices:
                self.append(vertex)
            return self

        def prepend_vertices(self, vertices: Sequence[Point2S]) -> "GreatArcPath.Builder":
            """Prepend vertices so that they appear in the given order."""
            for vertex in reversed(list(vertices)):
                self.prepend(vertex)
            return self

        def close(self) -> "GreatArcPath":
            """
            Join the end vertex back to the start vertex and build.

            Raises:
                PathConstructionError: If the path consists of full arcs
            """
            if self.end_arc is not None:
                if self._start_vertex is None or self._end_vertex is None:
                    raise PathConstructionError("Unable to close path: path is full")
                if not self._end_vertex.eq(self._start_vertex, self._end_precision):
                    self._append_arc(
                        GreatArc.from_points(self._end_vertex, self._start_vertex, self._end_precision)
                    )
            return self.build()

        def build(self) -> "GreatArcPath":
            """
            Build the path and reset the arc lists.

            Raises:
                PathConstructionError: If only a single vertex was given
            """
            arcs = list(reversed(self._prepended)) + self._appended
            if not arcs and self._start_vertex is not None:
                raise PathConstructionError(
                    f"Unable to create path; only a single point provided: {self._start_vertex}"
                )
            self._appended = []
            self._prepended = []
            return GreatArcPath(arcs) if arcs else _EMPTY

        def _validate_connected(self, previous: Optional[GreatArc], following: Optional[GreatArc]) -> None:
            if previous is None or following is None:
                return
            start = following.start_point
            end = previous.end_point
            if start is None or end is None or not start.eq(end, previous.precision):
                raise PathConstructionError(
                    f"Path arcs are not connected: previous={previous}, next={following}"
                )

        def _point_precision(self) -> PrecisionContext:
            if self.precision is None:
                raise PathConstructionError("Unable to create arc: no point precision specified")
            return self.precision

        def _append_arc(self, arc: GreatArc) -> None:
            if not self._appended and not self._prepended:
                self._start_vertex = arc.start_point
            self._end_vertex = arc.end_point
            self._end_precision = arc.precision
            self._appended.append(arc)

        def _prepend_arc(self, arc: GreatArc) -> None:
            self._start_vertex = arc.start_point
            if not self._prepended and not self._appended:
                self._end_vertex = arc.end_point
                self._end_precision = arc.precision
            self._prepended.append(arc)


_EMPTY = GreatArcPath()
