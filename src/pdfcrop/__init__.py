"""Batch converter from PDF pages to 4:3 cropped PNG images."""

__version__ = "0.1.0"
