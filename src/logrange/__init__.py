"""logrange — resolve time expressions into log-search intervals."""

__version__ = "0.1.0"
