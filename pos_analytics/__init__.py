"""POS analytics engine: time-windowed sales and inventory reporting."""

__version__ = "0.1.0"
