"""Task tracker client: optimistic task store over a remote task API."""

__version__ = "0.1.0"
