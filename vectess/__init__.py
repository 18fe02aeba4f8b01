"""Path flattening, fill and stroke tessellation, atlas packing and shader uniforms for 2D rendering."""

__version__ = "0.1.0"

__all__ = ["atlas", "cache", "renderer", "strokes", "text", "uniform"]