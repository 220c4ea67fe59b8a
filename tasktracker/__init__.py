"""Task Tracker: personal task records behind bearer-token authentication."""

__version__ = "0.1.0"
