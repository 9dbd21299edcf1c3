"""Filter and filter factory protocols."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from TestModel.filtering.description import Description


@runtime_checkable
class Filter(Protocol):
    """Protocol for test-selection predicates.

    A suite should run when at least one of its children should.
    """

    def should_run(self, description: Description) -> bool: ...

    def describe(self) -> str: ...


@dataclass(frozen=True)
class FilterFactoryParams:
    """Arguments handed to a filter factory, taken from the filter spec."""

    args: str = ""

    def split(self, separator: str = ",") -> tuple[str, ...]:
        """Non-empty, stripped items of a separated argument string."""
        return tuple(a.strip() for a in self.args.split(separator) if a.strip())


@runtime_checkable
class FilterFactory(Protocol):
    """Protocol for components turning a textual argument into a filter.

    Implementations must be constructible without arguments and raise
    ``FilterNotCreatedError`` when they reject their parameters.
    """

    def create_filter(self, params: FilterFactoryParams) -> Filter: ...
