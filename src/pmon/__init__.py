"""pmon: terminal progress monitor for a bounded time window."""

__version__ = "0.1.0"
