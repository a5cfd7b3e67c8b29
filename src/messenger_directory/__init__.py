"""User directory and message lookups for a direct-messaging backend."""

__version__ = "0.1.0"
