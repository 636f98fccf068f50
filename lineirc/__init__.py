"""lineirc: a minimal line-oriented IRC client."""

__version__ = "0.1.0"
