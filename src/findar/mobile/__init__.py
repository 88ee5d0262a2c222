"""
FindAR Mobile - Cross-platform Kivy UI for live object finding.

Runs on desktop (Windows, macOS, Linux) and mobile (Android, iOS):
- Live camera preview with bounding box overlay
- Detection banner with throttled updates
- Alert sound when a sharp object is detected
"""

from .app import FindARApp

__all__ = ["FindARApp"]
