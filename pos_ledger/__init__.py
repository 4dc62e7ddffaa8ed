"""Double-entry bookkeeping for a retail point of sale."""

__version__ = "0.1.0"
