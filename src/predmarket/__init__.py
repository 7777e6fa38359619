"""predmarket: prediction market listing and creation API."""

__version__ = "0.1.0"
