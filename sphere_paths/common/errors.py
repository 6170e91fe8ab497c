"""Exception types raised by sphere_paths."""


class SpherePathsError(Exception):
    """Base class for all sphere_paths errors."""


class DegenerateGeometryError(SpherePathsError, ValueError):
    """No unique great circle exists for the given input (equal or antipodal points, zero pole)."""


class InvalidIntervalError(SpherePathsError, ValueError):
    """Interval bounds do not form a valid full or bounded range."""


class PathConstructionError(SpherePathsError, ValueError):
    """Arcs or vertices cannot be assembled into a connected path."""


class ConnectorInvariantError(SpherePathsError, RuntimeError):
    """
    Internal defect in the arc connector.

    Raised when a selection policy returns something other than one of the
    offered candidates, or when an arc would be dropped from the output.
    This is never a user error and must not be caught to recover.
    """
