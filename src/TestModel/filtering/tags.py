"""Tag-based filters and the factories building them from filter specs."""
from __future__ import annotations

from dataclasses import dataclass

from TestModel.filtering.description import Description
from TestModel.filtering.filter import FilterFactoryParams
from TestModel.shared.errors import FilterNotCreatedError


@dataclass(frozen=True)
class TagFilter:
    """Selects tests by their tags, compared case-insensitively."""

    include_tags: frozenset[str] = frozenset()
    exclude_tags: frozenset[str] = frozenset()

    def matches(self, tags: frozenset[str]) -> bool:
        normalized_tags = frozenset(t.lower() for t in tags)
        if self.include_tags and not (normalized_tags & self.include_tags):
            return False
        return not (self.exclude_tags and (normalized_tags & self.exclude_tags))

    def should_run(self, description: Description) -> bool:
        if description.is_suite:
            return any(self.should_run(child) for child in description.children)
        return self.matches(description.tags)

    def describe(self) -> str:
        parts = []
        if self.include_tags:
            parts.append(f"include tags {sorted(self.include_tags)}")
        if self.exclude_tags:
            parts.append(f"exclude tags {sorted(self.exclude_tags)}")
        return ", ".join(parts) or "all tests"


def _parse_tags(params: FilterFactoryParams, factory_name: str) -> frozenset[str]:
    tags = frozenset(t.lower() for t in params.split())
    if not tags:
        msg = f"{factory_name} requires at least one tag, e.g. {factory_name}=smoke,fast"
        raise FilterNotCreatedError(msg)
    return tags


class IncludeTags:
    """Runs only tests carrying at least one of the given tags."""

    name = "include-tags"

    def create_filter(self, params: FilterFactoryParams) -> TagFilter:
        return TagFilter(include_tags=_parse_tags(params, self.name))


class ExcludeTags:
    """Runs only tests carrying none of the given tags."""

    name = "exclude-tags"

    def create_filter(self, params: FilterFactoryParams) -> TagFilter:
        return TagFilter(exclude_tags=_parse_tags(params, self.name))
