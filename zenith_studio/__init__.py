"""Zenith Studio: medical drama comics and episodes from textbook excerpts."""

__version__ = "0.1.0"
