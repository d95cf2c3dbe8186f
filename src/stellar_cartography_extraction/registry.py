"""Materializer registry for category-based dispatch.

This module provides a central registry mapping each asset category to
the factory that builds its materializer, plus automatic discovery of
the materializer modules.
"""

import importlib
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from .core.types import AssetCategory

if TYPE_CHECKING:
    from .core.config import OutputLayout
    from .materializers.base import Materializer


class MaterializerRegistry:
    """Central registry for materializer factories.

    Materializer modules register themselves when imported, and the
    registry can discover all of them from the materializers/ directory.
    """

    _factories: dict[AssetCategory, Callable[..., "Materializer"]] = {}

    @classmethod
    def register_factory(
        cls, category: AssetCategory, factory: Callable[..., "Materializer"]
    ) -> None:
        """Register a factory function for a category.

        Args:
            category: The category the materializer handles
            factory: Callable taking (layout, quiet=...) and returning a Materializer

        Example:
            >>> MaterializerRegistry.register_factory(AssetCategory.SCHEMA, SchemaMaterializer)
        """
        cls._factories[category] = factory

    @classmethod
    def create(
        cls, category: AssetCategory, layout: "OutputLayout", **kwargs
    ) -> "Materializer":
        """Create the materializer for a category.

        Args:
            category: Category to create a materializer for
            layout: Output layout passed to the factory
            **kwargs: Extra arguments for the factory (e.g. quiet)

        Raises:
            ValueError: If no materializer is registered for the category
        """
        if category not in cls._factories:
            available = ", ".join(c.value for c in cls._factories) or "none"
            raise ValueError(
                f"No materializer for category '{category.value}'. Available: {available}"
            )

        return cls._factories[category](layout, **kwargs)

    @classmethod
    def create_all(cls, layout: "OutputLayout", **kwargs) -> dict[AssetCategory, "Materializer"]:
        """Create one materializer per category.

        Raises:
            ValueError: If any category has no registered materializer
        """
        return {category: cls.create(category, layout, **kwargs) for category in AssetCategory}

    @classmethod
    def list_categories(cls) -> list[AssetCategory]:
        """List all categories with a registered materializer."""
        return list(cls._factories.keys())

    @classmethod
    def discover_materializers(cls) -> None:
        """Import every module in the materializers/ directory.

        Modules register their materializer at import time.
        """
        materializers_dir = Path(__file__).parent / "materializers"

        for module_path in sorted(materializers_dir.glob("*.py")):
            if module_path.stem in ("__init__", "base"):
                continue

            importlib.import_module(
                f".materializers.{module_path.stem}",
                package="stellar_cartography_extraction",
            )
