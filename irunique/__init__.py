"""Uniqued storage, interned IR types and use-def chain bookkeeping."""

__version__ = "0.1.0"
__all__ = ["storage_uniquer", "uniqued_any", "types", "use_def"]