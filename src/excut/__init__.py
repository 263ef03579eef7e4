"""One-dimensional cutting stock optimization for linear stock material."""

__version__ = "1.0.0"
