"""In-memory list engine and inventory analytics for the retail admin console."""

__version__ = "0.1.0"
