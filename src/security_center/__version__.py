"""Version information for security-center."""

__version__ = "1.0.0"
