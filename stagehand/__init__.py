"""Models and local helpers for observing, acting on and extracting from web pages."""

__version__ = "0.1.0"