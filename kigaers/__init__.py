"""Kiga-ers: swipe through arXiv papers and ask an AI about the ones you keep."""

__version__ = "0.1.0"
