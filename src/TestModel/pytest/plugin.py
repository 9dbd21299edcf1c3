"""pytest plugin applying filter specifications to collected tests.

Registered as a ``pytest11`` entry point. Activated via CLI options:

    pytest --model-filter=include-tags=smoke tests/
    pytest --model-filter=mypackage.filters.SlowTestsFactory tests/

Without ``--model-filter`` (and with ``TESTMODEL_FILTER`` unset) the plugin
is inactive.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from TestModel.filtering.description import Description
from TestModel.filtering.factories import create_filter_from_filter_spec
from TestModel.model.cache import TestClassCache
from TestModel.shared.config import PluginConfig
from TestModel.shared.errors import ConfigurationError, FilterNotCreatedError
from TestModel.tagging.tags import Category

if TYPE_CHECKING:
    from TestModel.filtering.filter import Filter

logger = logging.getLogger("TestModel.pytest")

_model_cache = TestClassCache()


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register CLI options for filter-based test selection."""
    group = parser.getgroup("testmodel", "Filter-spec based test selection")
    group.addoption(
        "--model-filter",
        action="append",
        default=None,
        metavar="SPEC",
        help="Filter spec 'factory[=args]'. Repeatable; a test must pass "
        "every filter. Defaults to $TESTMODEL_FILTER (';'-separated).",
    )


def _filter_specs(config: pytest.Config) -> tuple[str, ...]:
    specs = config.getoption("--model-filter", default=None)
    if specs:
        return tuple(specs)
    return PluginConfig.from_environment().filter_specs


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item],
) -> None:
    """Deselect the collected tests rejected by any configured filter.

    Runs after all other collection hooks (trylast=True) so we operate
    on the final filtered set.
    """
    specs = _filter_specs(config)
    if not specs:
        return  # Plugin disabled

    filters: list[Filter] = []
    for spec in specs:
        try:
            filters.append(create_filter_from_filter_spec(spec))
        except FilterNotCreatedError as exc:
            raise pytest.UsageError(
                f"Invalid --model-filter {spec!r}: {exc}"
            ) from exc

    selected: list[pytest.Item] = []
    deselected: list[pytest.Item] = []
    for item in items:
        description = describe_item(item)
        if all(f.should_run(description) for f in filters):
            selected.append(item)
        else:
            deselected.append(item)

    if deselected:
        config.hook.pytest_deselected(items=deselected)
        items[:] = selected

    logger.info(
        "[TESTMODEL] Selected %d/%d tests (filters=%s).",
        len(selected), len(selected) + len(deselected),
        "; ".join(f.describe() for f in filters),
    )


def describe_item(item: pytest.Item) -> Description:
    """Build the filter's view of a collected pytest item.

    Tags are the item's marker names plus the names of ``Category`` tags on
    the matching method of its class.
    """
    cls = getattr(item, "cls", None)
    method_name = getattr(item, "originalname", None) or item.name
    tags = {mark.name for mark in item.iter_markers()}
    class_name = None
    if cls is not None:
        class_name = f"{cls.__module__}.{cls.__qualname__}"
        tags.update(_category_names(cls, method_name))
    return Description(
        display_name=item.nodeid,
        class_name=class_name,
        method_name=method_name,
        tags=frozenset(tags),
    )


def _category_names(cls: type, method_name: str) -> set[str]:
    try:
        model = _model_cache.get(cls)
    except ConfigurationError as exc:
        logger.debug(
            "[TESTMODEL] event=model_skipped class=%s reason=%s",
            cls.__qualname__, exc,
        )
        return set()
    names: set[str] = set()
    for method in model.get_annotated_methods(Category):
        if method.name == method_name:
            names.update(method.get_tag(Category).names)  # type: ignore[union-attr]
    return names
