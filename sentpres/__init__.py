"""Plain text presentation tool: slide parsing, farbfeld images and a pygame viewer."""

__version__ = "1.0.0"
__all__ = ["__version__"]