"""Tests for MemberRegistry shadow resolution and ordering."""
from __future__ import annotations

from dataclasses import dataclass

from TestModel.model.registry import MemberRegistry
from TestModel.tagging.tags import After, Before, Tag, Test


@dataclass(frozen=True)
class FakeMember:
    """Minimal member: shadows another member with the same name."""

    owner: str
    name: str
    tags: tuple[Tag, ...] = ()

    def is_shadowed_by(self, other: FakeMember) -> bool:
        return other.name == self.name

    def is_shadowed_by_any(self, members: list[FakeMember]) -> bool:
        return any(self.is_shadowed_by(m) for m in members)


def _labels(members) -> list[str]:  # type: ignore[no-untyped-def]
    return [f"{m.owner}.{m.name}" for m in members]


class TestMemberRegistry:
    def test_untagged_members_are_not_listed(self) -> None:
        registry = MemberRegistry([FakeMember("Leaf", "helper")])
        assert registry.annotated_members() == ()
        assert len(registry) == 0

    def test_keeps_walk_order_for_normal_tags(self) -> None:
        registry = MemberRegistry([
            FakeMember("Leaf", "test_b", (Test(),)),
            FakeMember("Root", "test_a", (Test(),)),
        ])
        assert _labels(registry.members_with_tag(Test)) == ["Leaf.test_b", "Root.test_a"]

    def test_reverse_order_tags_are_prepended(self) -> None:
        registry = MemberRegistry(
            [
                FakeMember("Leaf", "set_up_leaf", (Before(),)),
                FakeMember("Middle", "set_up_middle", (Before(),)),
                FakeMember("Root", "set_up_root", (Before(),)),
            ],
            reverse_order_tags=frozenset({Before}),
        )
        assert _labels(registry.members_with_tag(Before)) == [
            "Root.set_up_root",
            "Middle.set_up_middle",
            "Leaf.set_up_leaf",
        ]
        assert _labels(registry.annotated_members()) == [
            "Leaf.set_up_leaf",
            "Middle.set_up_middle",
            "Root.set_up_root",
        ]

    def test_first_declaration_shadows_later_ones(self) -> None:
        registry = MemberRegistry([
            FakeMember("Leaf", "tear_down", (After(),)),
            FakeMember("Root", "tear_down", (After(), Test())),
        ])
        assert _labels(registry.annotated_members()) == ["Leaf.tear_down"]
        assert _labels(registry.members_with_tag(After)) == ["Leaf.tear_down"]
        assert registry.members_with_tag(Test) == ()

    def test_untagged_declaration_still_shadows(self) -> None:
        registry = MemberRegistry([
            FakeMember("Leaf", "test_it"),
            FakeMember("Root", "test_it", (Test(),)),
            FakeMember("Root", "test_other", (Test(),)),
        ])
        assert _labels(registry.annotated_members()) == ["Root.test_other"]
        assert _labels(registry.members_with_tag(Test)) == ["Root.test_other"]

    def test_member_with_several_tags_is_listed_under_each(self) -> None:
        member = FakeMember("Leaf", "both", (Before(), After()))
        registry = MemberRegistry([member], reverse_order_tags=frozenset({Before}))
        assert registry.members_with_tag(Before) == (member,)
        assert registry.members_with_tag(After) == (member,)
        assert registry.tag_types() == frozenset({Before, After})

    def test_absent_tag_is_empty(self) -> None:
        registry = MemberRegistry([FakeMember("Leaf", "t", (Test(),))])
        assert registry.members_with_tag(Before) == ()
