"""Versioned schema migrations: migration records, helpers and migration sources."""

__version__ = "4.0.0"