"""Version information for docprops."""

__version__ = "1.0.0"
