"""Coffee shop demo with build-time repository query processing."""

__version__ = "0.1.0"
