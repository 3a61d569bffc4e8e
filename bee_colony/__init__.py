"""Artificial Bee Colony foraging simulation."""

__version__ = "0.1.0"
