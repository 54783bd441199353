"""Trade journal performance analytics."""

__version__ = "1.0.0"
