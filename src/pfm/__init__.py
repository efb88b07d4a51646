"""pfm — command line client for pfd."""

__version__ = "0.1.0"
