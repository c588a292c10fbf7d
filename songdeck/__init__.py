"""Song catalog service with live statistics and a synchronizing client."""

__version__ = "1.0.0"
