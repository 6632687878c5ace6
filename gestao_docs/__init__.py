"""Document compliance engine for prayer-house property management."""

__version__ = "0.1.0"
