from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Description:
    """What a filter sees of a test or a suite of tests."""

    display_name: str
    class_name: str | None = None
    method_name: str | None = None
    tags: frozenset[str] = frozenset()
    children: tuple[Description, ...] = ()

    @classmethod
    def create_test_description(
        cls,
        class_name: str | None,
        method_name: str,
        tags: frozenset[str] | tuple[str, ...] = (),
    ) -> Description:
        display = f"{method_name}({class_name})" if class_name else method_name
        return cls(
            display_name=display,
            class_name=class_name,
            method_name=method_name,
            tags=frozenset(tags),
        )

    @classmethod
    def create_suite_description(
        cls, name: str, *children: Description
    ) -> Description:
        return cls(display_name=name, class_name=name, children=tuple(children))

    @property
    def is_suite(self) -> bool:
        return bool(self.children)

    @property
    def is_test(self) -> bool:
        return not self.children
