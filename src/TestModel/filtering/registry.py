"""Registry of short aliases for filter factories."""
from __future__ import annotations

from TestModel.filtering.tags import ExcludeTags, IncludeTags


class FilterFactoryRegistry:
    """Registry mapping factory aliases to their implementation classes."""

    def __init__(self) -> None:
        self._factories: dict[str, type] = {}

    def register(self, factory_class: type) -> None:
        """Register a factory class by its name attribute."""
        self._factories[factory_class.name] = factory_class

    def get(self, name: str) -> type:
        """Return the factory class registered under ``name``."""
        if name not in self._factories:
            available = ", ".join(sorted(self._factories))
            msg = (
                f"Unknown filter factory {name!r}. "
                f"Available: {available}"
            )
            raise KeyError(msg)
        return self._factories[name]

    def available(self) -> list[str]:
        """Return the aliases of all registered factories."""
        return sorted(self._factories)

    def is_available(self, name: str) -> bool:
        """Check if a factory alias is registered."""
        return name in self._factories


def _build_default_registry() -> FilterFactoryRegistry:
    registry = FilterFactoryRegistry()
    registry.register(IncludeTags)
    registry.register(ExcludeTags)
    return registry


default_registry = _build_default_registry()
