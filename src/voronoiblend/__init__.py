"""Interactive Voronoi diagram with color blending."""
__version__ = "0.1.0"
