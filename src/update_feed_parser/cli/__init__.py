"""Command-line interface module for Update Feed Parser.

This module provides CLI tools for inspecting local update feeds and
converting GitHub release payloads into the native feed format.
"""

from .main import main

__all__ = ["main"]
