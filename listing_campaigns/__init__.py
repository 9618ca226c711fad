"""Campaign generator for real-estate listings."""

__version__ = "1.0.0"
