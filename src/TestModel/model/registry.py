"""Member registry: shadow resolution and tag-indexed ordering."""
from __future__ import annotations

from typing import TYPE_CHECKING, Generic

from TestModel.model.members import M

if TYPE_CHECKING:
    from collections.abc import Iterable

    from TestModel.tagging.tags import Tag


class MemberRegistry(Generic[M]):
    """Tagged members of one kind, indexed by tag type.

    ``members`` must be given in hierarchy-walk order: the subclass's
    declarations first, then each ancestor's. Building happens in two passes:

    1. drop every member shadowed by a declaration seen earlier (tagged or
       not), so the most-derived declaration wins;
    2. fold the surviving tagged members into the all-members list and the
       per-tag lists. Tags in ``reverse_order_tags`` are inserted at the
       front, which puts base class members before subclass members.
    """

    def __init__(
        self,
        members: Iterable[M],
        reverse_order_tags: frozenset[type] = frozenset(),
    ) -> None:
        self._reverse_order_tags = reverse_order_tags
        survivors = self._resolve_shadowing(members)
        self._annotated, self._by_tag = self._fold(survivors)

    @staticmethod
    def _resolve_shadowing(members: Iterable[M]) -> list[M]:
        seen: dict[str, list[M]] = {}
        survivors: list[M] = []
        for member in members:
            same_name = seen.setdefault(member.name, [])
            if member.is_shadowed_by_any(same_name):
                continue
            same_name.append(member)
            if member.tags:
                survivors.append(member)
        return survivors

    def _fold(
        self, survivors: list[M]
    ) -> tuple[tuple[M, ...], dict[type[Tag], tuple[M, ...]]]:
        by_tag: dict[type[Tag], list[M]] = {}
        for member in survivors:
            for tag in member.tags:
                tag_type = type(tag)
                members = by_tag.setdefault(tag_type, [])
                if tag_type in self._reverse_order_tags:
                    members.insert(0, member)
                else:
                    members.append(member)
        return tuple(survivors), {k: tuple(v) for k, v in by_tag.items()}

    @property
    def reverse_order_tags(self) -> frozenset[type]:
        return self._reverse_order_tags

    def annotated_members(self) -> tuple[M, ...]:
        """All tagged members, shadow-resolved, in hierarchy-walk order."""
        return self._annotated

    def members_with_tag(self, tag_type: type[Tag]) -> tuple[M, ...]:
        """Members carrying ``tag_type``; empty when none does."""
        return self._by_tag.get(tag_type, ())

    def tag_types(self) -> frozenset[type[Tag]]:
        return frozenset(self._by_tag)

    def __len__(self) -> int:
        return len(self._annotated)
