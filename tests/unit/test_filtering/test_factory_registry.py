"""Tests for the filter factory registry."""
from __future__ import annotations

import pytest

from TestModel.filtering.registry import FilterFactoryRegistry, default_registry
from TestModel.filtering.tags import ExcludeTags, IncludeTags


class TestFilterFactoryRegistry:
    def test_include_tags_always_available(self) -> None:
        assert default_registry.is_available("include-tags")

    def test_exclude_tags_always_available(self) -> None:
        assert default_registry.is_available("exclude-tags")

    def test_get_returns_class(self) -> None:
        assert default_registry.get("include-tags") is IncludeTags
        assert default_registry.get("exclude-tags") is ExcludeTags

    def test_get_unknown_raises_key_error(self) -> None:
        with pytest.raises(KeyError, match="Unknown filter factory"):
            default_registry.get("unknown_factory")

    def test_available_lists_aliases(self) -> None:
        assert default_registry.available() == ["exclude-tags", "include-tags"]

    def test_register_custom_factory(self) -> None:
        registry = FilterFactoryRegistry()

        class DummyFactory:
            name = "dummy"

            def create_filter(self, params):  # type: ignore[no-untyped-def]
                return None

        registry.register(DummyFactory)
        assert registry.is_available("dummy")
        assert registry.get("dummy") is DummyFactory

    def test_is_available_false_for_unregistered(self) -> None:
        registry = FilterFactoryRegistry()
        assert not registry.is_available("nonexistent")
