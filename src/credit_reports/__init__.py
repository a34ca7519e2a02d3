"""Credit bureau report parsing engine and API."""

__version__ = "0.1.0"
