"""
Operators for sphere_paths.

Import from the specific modules directly:
- `sphere_paths.operators.arc_connector` (ArcConnector, ConnectableArc, ConnectReport)
- `sphere_paths.operators.interior_angle` (interior-angle policies and connectors)
"""
