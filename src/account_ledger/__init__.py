"""Terminal client for browsing and pruning account transactions."""

__version__ = "0.1.0"
