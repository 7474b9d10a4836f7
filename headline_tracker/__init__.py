"""Headline tracker: watch news feeds and announce headline changes."""

__version__ = "1.0.0"
