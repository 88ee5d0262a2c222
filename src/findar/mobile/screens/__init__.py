"""Screen modules for FindAR mobile UI."""

from .main_screen import MainScreen

__all__ = ["MainScreen"]
