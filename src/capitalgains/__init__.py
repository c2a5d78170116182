"""Capital gains tax calculator for a single weighted-average position."""

__version__ = "0.1.0"
