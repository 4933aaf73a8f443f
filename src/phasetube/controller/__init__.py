"""
The CONTROLLER layer holds the algorithms: integration, mesh extrusion,
camera control and the per-tick pipeline. It does not import Qt.
"""
