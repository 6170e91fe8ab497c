"""
Geometry package for sphere_paths.

Modules:
- vectors: NumPy helpers for 3-vectors
- point2s: points on the unit sphere
- angular_interval: 1-D intervals and cut angles on a circle
- great_circle: oriented great circles
- great_arc: convex great arcs and splitting
- arc_path: connected arc paths and their builder
"""
