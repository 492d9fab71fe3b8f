"""Nutricare API: content backend for the Nutricare marketing site."""

__version__ = "1.0.0"
