"""High-level API facade."""

from .client import Client

__all__ = ["Client"]
