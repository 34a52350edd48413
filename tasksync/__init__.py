"""Client-side task synchronization for the Todo application."""

__version__ = "1.0.0"
