"""Text buffer and syntax-highlighting engine for terminal editors."""

__all__ = [
    "adapters",
    "buffer",
    "filetype",
    "highlighting",
    "runtime",
]

__version__ = "0.1.0"
