"""Feature-flag HTTP client, in-memory function runtime, and small example helpers."""

__version__ = "0.1.0"
__all__ = ["example", "fnruntime", "sdk"]