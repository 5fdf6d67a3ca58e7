"""Router modules for the Kiga-ers API."""

from . import ask, papers, ping, summarize

__all__ = ["ask", "papers", "ping", "summarize"]
