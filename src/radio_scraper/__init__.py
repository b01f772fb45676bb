"""Resumable crawler for internet radio station directories."""

__version__ = "0.1.0"
