"""A small quotation web server: a thread-safe quote book, WSGI handlers and a command."""

__version__ = "0.1.0"
__all__ = ["__version__"]