"""Filtering bounded context: filter specs, factories and tag filters."""

from TestModel.filtering.description import Description
from TestModel.filtering.factories import (
    create_filter,
    create_filter_from_filter_spec,
    parse_filter_spec,
)
from TestModel.filtering.filter import Filter, FilterFactory, FilterFactoryParams
from TestModel.filtering.registry import FilterFactoryRegistry, default_registry
from TestModel.filtering.tags import ExcludeTags, IncludeTags, TagFilter

__all__ = [
    "Description",
    "ExcludeTags",
    "Filter",
    "FilterFactory",
    "FilterFactoryParams",
    "FilterFactoryRegistry",
    "IncludeTags",
    "TagFilter",
    "create_filter",
    "create_filter_from_filter_spec",
    "default_registry",
    "parse_filter_spec",
]
