"""Orthogonal transforms (rotations and reflections) of the unit sphere."""
