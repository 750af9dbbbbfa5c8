"""Uncovering History: map-centric front-end service for historical points of interest."""

__version__ = "1.0.0"
