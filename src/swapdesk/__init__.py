"""Swapdesk - token swap proposals with address resolution and chain policy."""

__version__ = "0.1.0"
