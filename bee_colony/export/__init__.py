"""Presentation package for the bee colony simulation."""

from .visualizer import Visualizer
from .reporter import Reporter

__all__ = ['Visualizer', 'Reporter']
