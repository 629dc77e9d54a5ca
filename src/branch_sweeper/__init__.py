"""Remove branches that have seen no commits for a configurable number of days."""

__version__ = "0.1.0"

__all__ = ["__version__"]
