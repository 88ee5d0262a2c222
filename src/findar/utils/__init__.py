"""Utility functions for FindAR."""

from .visualization import draw_banner, draw_detections

__all__ = ["draw_banner", "draw_detections"]
