"""Screenshot / URL / code to HTML conversion service."""

__version__ = "0.1.0"
