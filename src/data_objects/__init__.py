"""Immutable data objects with declarative, aggregated validation."""

__version__ = "0.1.0"
