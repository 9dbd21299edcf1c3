"""Tests for the filter factory resolver."""
from __future__ import annotations

import pytest

from TestModel.filtering.description import Description
from TestModel.filtering.factories import (
    create_filter,
    create_filter_from_filter_spec,
    parse_filter_spec,
    resolve_factory_class,
)
from TestModel.filtering.filter import Filter, FilterFactoryParams
from TestModel.filtering.registry import FilterFactoryRegistry
from TestModel.filtering.tags import IncludeTags, TagFilter
from TestModel.shared.errors import FilterNotCreatedError


class NameContainsFilter:
    def __init__(self, fragment: str) -> None:
        self.fragment = fragment

    def should_run(self, description: Description) -> bool:
        return self.fragment in description.display_name

    def describe(self) -> str:
        return f"name contains {self.fragment!r}"


class NameContainsFactory:
    name = "name-contains"

    def create_filter(self, params: FilterFactoryParams) -> Filter:
        if not params.args:
            raise FilterNotCreatedError("name-contains needs a fragment")
        return NameContainsFilter(params.args)


class BrokenFactory:
    def create_filter(self, params: FilterFactoryParams) -> Filter:
        raise RuntimeError("factory exploded")


class FactoryNeedingArguments:
    def __init__(self, option: str) -> None:
        self.option = option

    def create_filter(self, params: FilterFactoryParams) -> Filter:
        return NameContainsFilter(self.option)


class NotAFactory:
    pass


class Outer:
    class NestedFactory:
        def create_filter(self, params: FilterFactoryParams) -> Filter:
            return NameContainsFilter("nested")


class TestParseFilterSpec:
    def test_splits_on_first_equals(self) -> None:
        assert parse_filter_spec("com.example.MyFactory=foo,bar") == (
            "com.example.MyFactory",
            "foo,bar",
        )

    def test_no_equals_gives_empty_args(self) -> None:
        assert parse_filter_spec("com.example.MyFactory") == ("com.example.MyFactory", "")

    def test_later_equals_belong_to_args(self) -> None:
        assert parse_filter_spec("f=a=b") == ("f", "a=b")

    def test_trailing_equals_gives_empty_args(self) -> None:
        assert parse_filter_spec("f=") == ("f", "")


class TestCreateFilter:
    def test_from_import_path(self) -> None:
        created = create_filter_from_filter_spec(
            "TestModel.filtering.tags.IncludeTags=Smoke, fast"
        )
        assert created == TagFilter(include_tags=frozenset({"smoke", "fast"}))

    def test_from_colon_import_path(self) -> None:
        created = create_filter_from_filter_spec(
            "TestModel.filtering.tags:ExcludeTags=slow"
        )
        assert created == TagFilter(exclude_tags=frozenset({"slow"}))

    def test_from_alias(self) -> None:
        created = create_filter_from_filter_spec("include-tags=smoke")
        assert isinstance(created, TagFilter)

    def test_from_nested_class_path(self) -> None:
        created = create_filter_from_filter_spec(f"{__name__}.Outer.NestedFactory")
        assert created.describe() == "name contains 'nested'"

    def test_from_class(self) -> None:
        created = create_filter(NameContainsFactory, "login")
        assert created.should_run(Description("test_login(AuthTests)"))
        assert not created.should_run(Description("test_logout(AuthTests)"))

    def test_with_custom_registry(self) -> None:
        registry = FilterFactoryRegistry()
        registry.register(NameContainsFactory)
        created = create_filter_from_filter_spec("name-contains=login", registry)
        assert isinstance(created, NameContainsFilter)

    def test_unresolvable_identifier(self) -> None:
        with pytest.raises(FilterNotCreatedError) as info:
            create_filter_from_filter_spec("com.example.MyFactory=foo")
        assert isinstance(info.value.__cause__, ImportError)

    def test_unknown_attribute(self) -> None:
        with pytest.raises(FilterNotCreatedError) as info:
            create_filter_from_filter_spec("TestModel.filtering.tags.NoSuchFactory")
        assert isinstance(info.value.__cause__, AttributeError)

    def test_unknown_alias(self) -> None:
        with pytest.raises(FilterNotCreatedError):
            create_filter_from_filter_spec("no-such-alias=x")

    def test_class_that_is_not_a_factory(self) -> None:
        with pytest.raises(FilterNotCreatedError, match="not a filter factory"):
            create_filter_from_filter_spec(f"{__name__}.NotAFactory")

    def test_factory_that_cannot_be_instantiated(self) -> None:
        with pytest.raises(FilterNotCreatedError, match="no zero-argument constructor"):
            create_filter(FactoryNeedingArguments, "")

    def test_factory_rejecting_args(self) -> None:
        with pytest.raises(FilterNotCreatedError, match="needs a fragment"):
            create_filter(NameContainsFactory, "")

    def test_factory_failure_is_wrapped(self) -> None:
        with pytest.raises(FilterNotCreatedError, match="factory exploded") as info:
            create_filter(BrokenFactory, "x")
        assert isinstance(info.value.__cause__, RuntimeError)

    def test_include_tags_without_tags(self) -> None:
        with pytest.raises(FilterNotCreatedError, match="at least one tag"):
            create_filter_from_filter_spec("include-tags")


class TestResolveFactoryClass:
    def test_alias_resolves_to_class(self) -> None:
        assert resolve_factory_class("include-tags") is IncludeTags

    def test_import_path_resolves_to_class(self) -> None:
        assert resolve_factory_class("TestModel.filtering.tags.IncludeTags") is IncludeTags
