"""Version of the trackpid package."""

__version__ = "0.1.0"
