"""Wireframe viewer for FdF height maps: map loading, projection, tile culling and rendering."""

__version__ = "0.1.0"