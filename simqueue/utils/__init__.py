"""Utility functions and helpers."""

from .logger import setup_logger
from .io import save_results, load_results, save_trace
from .visualization import plot_results, plot_queue_timeline

__all__ = ["setup_logger", "save_results", "load_results", "save_trace",
           "plot_results", "plot_queue_timeline"]
