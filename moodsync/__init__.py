"""MoodSync: mood labels and matching songs for gallery photos."""

__version__ = "0.1.0"
