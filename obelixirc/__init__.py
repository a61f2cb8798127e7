"""A small password-protected IRC-style chat server with channels, modes and operators."""

__version__ = "0.1.0"
__all__ = ["__version__"]