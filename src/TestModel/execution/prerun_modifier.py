from __future__ import annotations

from robot.api import SuiteVisitor

from TestModel.filtering.description import Description
from TestModel.filtering.factories import create_filter_from_filter_spec


class FilterPreRunModifier(SuiteVisitor):
    """PreRunModifier that keeps only the tests accepted by a filter spec.

    Usage CLI::

        robot --prerunmodifier TestModel.execution.prerun_modifier.FilterPreRunModifier:include-tags=smoke tests/

    Usage programmatic:
        suite.visit(FilterPreRunModifier('include-tags=smoke'))
    """

    def __init__(self, filter_spec: str) -> None:
        self._filter = create_filter_from_filter_spec(filter_spec)
        self._stats = {"kept": 0, "removed": 0}

    def start_suite(self, suite) -> None:  # type: ignore[override]
        original = len(suite.tests)
        suite.tests = [
            t for t in suite.tests
            if self._filter.should_run(describe_test(suite, t))
        ]
        self._stats["kept"] += len(suite.tests)
        self._stats["removed"] += original - len(suite.tests)

    def end_suite(self, suite) -> None:  # type: ignore[override]
        suite.suites = [s for s in suite.suites if s.test_count > 0]

    def visit_test(self, test) -> None:  # type: ignore[override]
        pass  # skip internals for performance

    @property
    def stats(self) -> dict[str, int]:
        return dict(self._stats)


def describe_test(suite, test) -> Description:  # type: ignore[no-untyped-def]
    """Describe a Robot Framework test for filtering."""
    return Description.create_test_description(
        class_name=suite.name,
        method_name=test.name,
        tags=tuple(str(tag) for tag in test.tags),
    )
