"""Read-only inspection of chunked, indexed binary datasets."""

__version__ = "0.1.0"
