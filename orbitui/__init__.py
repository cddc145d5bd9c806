"""Reactive state, CSS-like styling, camera maths and renderer interfaces for UIs."""

__version__ = "0.1.10"

__all__ = [
    "camera",
    "reactive",
    "renderer",
    "state",
    "style",
    "stylesheet",
    "tracking",
]