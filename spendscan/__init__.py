"""Receipt scanning and spending analysis."""

__version__ = "0.1.0"
