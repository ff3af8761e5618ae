"""Memory-threshold and scheduled restarts for Railway services."""

__version__ = "0.1.0"
