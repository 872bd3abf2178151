"""Framing proxy that rewrites pages for embedding and relays file downloads."""

__version__ = "1.0.0"
