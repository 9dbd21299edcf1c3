"""Tag vocabulary and the mechanics of attaching tags to members.

Methods (and classes) are tagged by decorating them with a tag instance::

    class CalculatorTest:
        @Before()
        def set_up(self) -> None: ...

        @Test(expected=ZeroDivisionError)
        def divides_by_zero(self) -> None: ...

Fields are tagged through ``typing.Annotated`` metadata::

    class CalculatorTest:
        resource: Annotated[Resource, Rule()]
        shared: ClassVar[Annotated[Resource, ClassRule()]]
"""
from __future__ import annotations

import typing
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar

TAGS_ATTRIBUTE = "__testmodel_tags__"


class Tag:
    """Base class for tags. Instances are decorators; the subclass is the tag type."""

    __slots__ = ()

    def __call__(self, target: Any) -> Any:
        attach_tag(target, self)
        return target

    @property
    def tag_type(self) -> type[Tag]:
        return type(self)


def _unwrap(target: Any) -> Any:
    if isinstance(target, (staticmethod, classmethod)):
        return target.__func__
    return target


def attach_tag(target: Any, tag: Tag) -> None:
    """Attach ``tag`` to a function, static/class method or class.

    Decorators apply bottom-up, so each new tag is prepended to keep the
    stored order equal to the source order.
    """
    func = _unwrap(target)
    current = declared_tags(func)
    for each in current:
        if type(each) is type(tag):
            msg = (
                f"{getattr(func, '__qualname__', func)!s} is already "
                f"tagged with @{type(tag).__name__}"
            )
            raise TypeError(msg)
    setattr(func, TAGS_ATTRIBUTE, (tag, *current))


def declared_tags(target: Any) -> tuple[Tag, ...]:
    """Tags declared directly on ``target``, in source order.

    Classes are read through their own ``__dict__`` so that a subclass does
    not report the tags of its base.
    """
    func = _unwrap(target)
    if isinstance(func, type):
        return tuple(vars(func).get(TAGS_ATTRIBUTE, ()))
    return tuple(getattr(func, TAGS_ATTRIBUTE, ()))


def unpack_field_annotation(annotation: Any) -> tuple[Any, tuple[Tag, ...], bool]:
    """Split a field annotation into ``(type, tags, is_static)``.

    Both ``ClassVar[Annotated[T, ...]]`` and ``Annotated[ClassVar[T], ...]``
    are understood.
    """
    is_static = False
    tags: tuple[Tag, ...] = ()
    current = annotation
    while True:
        origin = typing.get_origin(current)
        if origin is ClassVar:
            is_static = True
            args = typing.get_args(current)
            current = args[0] if args else Any
        elif origin is Annotated:
            tags += tuple(m for m in current.__metadata__ if isinstance(m, Tag))
            current = current.__origin__
        elif current is ClassVar:
            return Any, tags, True
        else:
            return current, tags, is_static


@dataclass(frozen=True)
class Test(Tag):
    """Marks a test method."""

    __test__ = False

    expected: type[BaseException] | None = None
    timeout: float = 0.0


@dataclass(frozen=True)
class Ignore(Tag):
    """Marks a test method or class as skipped."""

    reason: str = ""


@dataclass(frozen=True)
class Before(Tag):
    """Runs before each test. Base class methods run first."""


@dataclass(frozen=True)
class After(Tag):
    """Runs after each test. Subclass methods run first."""


@dataclass(frozen=True)
class BeforeClass(Tag):
    """Runs once before the tests of a class. Base class methods run first."""


@dataclass(frozen=True)
class AfterClass(Tag):
    """Runs once after the tests of a class. Subclass methods run first."""


@dataclass(frozen=True)
class Rule(Tag):
    """Marks a field or method providing a per-test rule."""


@dataclass(frozen=True)
class ClassRule(Tag):
    """Marks a static field or method providing a per-class rule."""


@dataclass(frozen=True)
class Parameter(Tag):
    """Marks a field receiving the parameter at ``value`` of a parameterized test."""

    value: int = 0


@dataclass(frozen=True)
class DataPoint(Tag):
    """Marks a field or method supplying a data point for theories."""


class Category(Tag):
    """Free-form names used to select tests, e.g. ``@Category("slow", "db")``."""

    __slots__ = ("names",)

    def __init__(self, *names: str) -> None:
        self.names = tuple(names)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Category):
            return self.names == other.names
        return NotImplemented

    def __hash__(self) -> int:
        return hash((Category, self.names))

    def __repr__(self) -> str:
        return f"Category{self.names!r}"
