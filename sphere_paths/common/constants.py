"""
sphere_paths constants only.

=============================================================================
CONVENTION QUICK REFERENCE
=============================================================================

POINTS (Point2S):
  azimuth in [0, 2pi), polar in [0, pi]
  vector = (cos(az) sin(polar), sin(az) sin(polar), cos(polar))
  PLUS_K (north pole) has polar = 0

GREAT CIRCLES:
  Right-handed frame (u, v, pole) with u x v = pole
  Azimuth of p: atan2(v . p, u . p) in [0, 2pi)
  Offset of p: angle(pole, p) - pi/2, so the pole side is the MINUS side

ARCS:
  Oriented from interval min to interval max (counter-clockwise about the pole)
  Bounded arcs are convex: size <= pi
=============================================================================
"""

import math

# =============================================================================
# Angles
# =============================================================================

PI = math.pi
TWO_PI = 2.0 * math.pi
HALF_PI = 0.5 * math.pi

# =============================================================================
# Precision defaults
# =============================================================================

# Default epsilon for PrecisionContext (radians for angular quantities).
DEFAULT_EPSILON = 1e-10

# Norm below which a vector is treated as zero when normalizing.
# Numerical stability only; never used for geometric decisions.
VECTOR_NORM_EPSILON = 1e-300

# =============================================================================
# Connector defaults
# =============================================================================

# Name of the selection policy used when none is configured.
DEFAULT_CONNECTION_POLICY = "first"
