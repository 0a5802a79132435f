"""I/O package for the guard patrol simulation."""

from .csv_writer import CSVWriter
from .visualizer import Visualizer
from .reporter import Reporter
from .text_render import render_text

__all__ = ['CSVWriter', 'Visualizer', 'Reporter', 'render_text']
