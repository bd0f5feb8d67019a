"""Software rasterization toolkit: vector math, formatting, containers, input events, pixel views, drawing and accumulators."""

__version__ = "0.1.0"

__all__ = [
    "containers",
    "draw",
    "events",
    "fileio",
    "formatting",
    "image",
    "liacc",
    "riacc",
    "stringmap",
    "vecmath",
]