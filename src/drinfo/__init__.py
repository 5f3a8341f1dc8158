"""drinfo - mounted drive usage report for the terminal."""

__version__ = "0.3.0"
