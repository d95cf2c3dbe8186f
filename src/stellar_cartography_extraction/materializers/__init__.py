"""Category-specific materializers.

Each module registers its materializer with MaterializerRegistry when it
is imported; MaterializerRegistry.discover_materializers() imports them all.
"""

from .base import Materializer

__all__ = ["Materializer"]
