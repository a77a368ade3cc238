"""API endpoints package."""

from . import health
from . import exports

__all__ = ["health", "exports"]
