"""Member model: one concrete method or field of a test class."""
from __future__ import annotations

import enum
import inspect
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from TestModel.tagging.tags import Tag, declared_tags, unpack_field_annotation

if TYPE_CHECKING:
    from collections.abc import Iterable

M = TypeVar("M", bound="FrameworkMember[Any]")

_EMPTY = inspect.Parameter.empty
_NONE_ANNOTATIONS = (None, type(None), "None")


class Visibility(enum.Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


def visibility_of(name: str, declaring_class: type) -> Visibility:
    """Derive visibility from naming conventions.

    Double-underscore names are mangled by the compiler to
    ``_ClassName__name``; both forms count as private.
    """
    mangled_prefix = f"_{declaring_class.__name__.lstrip('_')}__"
    if name.startswith(mangled_prefix):
        return Visibility.PRIVATE
    if name.startswith("__") and name.endswith("__"):
        return Visibility.PUBLIC
    if name.startswith("__"):
        return Visibility.PRIVATE
    if name.startswith("_"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


def is_method_like(value: Any) -> bool:
    return inspect.isfunction(value) or isinstance(value, (staticmethod, classmethod))


def _unwrap(raw: Any) -> Any:
    if isinstance(raw, (staticmethod, classmethod)):
        return raw.__func__
    return raw


def _parameter_types(raw: Any, signature: inspect.Signature) -> tuple[tuple[Any, Any], ...]:
    params = list(signature.parameters.values())
    if (
        not isinstance(raw, staticmethod)
        and params
        and params[0].kind
        in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ):
        params = params[1:]
    return tuple((p.kind, p.annotation) for p in params)


class FrameworkMember(ABC, Generic[M]):
    """Common behaviour of methods and fields discovered on a test class."""

    _declaring_class: type
    _name: str
    _tags: tuple[Tag, ...]

    @property
    def name(self) -> str:
        return self._name

    @property
    def declaring_class(self) -> type:
        """The class whose body declares this member."""
        return self._declaring_class

    @property
    def tags(self) -> tuple[Tag, ...]:
        return self._tags

    @property
    def visibility(self) -> Visibility:
        return visibility_of(self._name, self._declaring_class)

    @property
    def is_public(self) -> bool:
        return self.visibility is Visibility.PUBLIC

    @property
    @abstractmethod
    def is_static(self) -> bool: ...

    @property
    @abstractmethod
    def type(self) -> Any: ...

    @abstractmethod
    def is_shadowed_by(self, other: M) -> bool: ...

    def is_shadowed_by_any(self, members: Iterable[M]) -> bool:
        return any(self.is_shadowed_by(each) for each in members)

    def get_tag(self, tag_type: type[Tag]) -> Tag | None:
        """Return the tag of ``tag_type`` carried by this member, if any."""
        for tag in self._tags:
            if type(tag) is tag_type:
                return tag
        return None

    def __eq__(self, other: object) -> bool:
        if type(other) is type(self):
            return (
                other._declaring_class is self._declaring_class  # type: ignore[attr-defined]
                and other._name == self._name  # type: ignore[attr-defined]
            )
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self), self._declaring_class, self._name))


class FrameworkMethod(FrameworkMember["FrameworkMethod"]):
    """A method on a test class to be invoked at some point of test execution.

    Such methods are usually tagged (``Test``, ``Before``, ``After``,
    ``BeforeClass``, ``AfterClass``, ...). The resolved tags of a method that
    carries tags of its own also include the tags of same-signature,
    non-private declarations in its ancestors, where a tag type declared
    closer to the subclass masks the same type further up. A redeclaration
    without tags resolves to no tags.
    """

    def __init__(self, declaring_class: type, name: str) -> None:
        if declaring_class is None:
            raise TypeError(
                "FrameworkMethod cannot be created without an underlying method."
            )
        raw = vars(declaring_class).get(name)
        if not is_method_like(raw):
            msg = f"{declaring_class.__qualname__} declares no method {name!r}"
            raise ValueError(msg)
        self._declaring_class = declaring_class
        self._name = name
        self._raw = raw
        self._function = _unwrap(raw)
        self._signature = inspect.signature(self._function)
        self._parameter_types = _parameter_types(raw, self._signature)
        self._tags = self._collect_tags()

    @property
    def function(self) -> Any:
        """The underlying function object."""
        return self._function

    @property
    def signature(self) -> inspect.Signature:
        return self._signature

    @property
    def parameter_types(self) -> tuple[tuple[Any, Any], ...]:
        """Kinds and annotations of the parameters after ``self``/``cls``."""
        return self._parameter_types

    @property
    def return_type(self) -> Any:
        return self._signature.return_annotation

    @property
    def type(self) -> Any:
        return self.return_type

    @property
    def is_static(self) -> bool:
        return isinstance(self._raw, (staticmethod, classmethod))

    @property
    def returns_none(self) -> bool:
        annotation = self.return_type
        return annotation is _EMPTY or annotation in _NONE_ANNOTATIONS

    def invoke_explosively(self, target: Any, *params: Any) -> Any:
        """Invoke the method on ``target`` and return its result.

        Exceptions raised by the method propagate unchanged.
        """
        owner = type(target) if target is not None else self._declaring_class
        return self._raw.__get__(target, owner)(*params)

    def validate_public_void(self, is_static: bool, errors: list[Exception]) -> None:
        """Append to ``errors`` if this method has the wrong static-ness,
        is not public, or returns something other than ``None``.
        """
        if self.is_static != is_static:
            state = "should" if is_static else "should not"
            errors.append(Exception(f"Method {self._name}() {state} be static"))
        if not self.is_public:
            errors.append(Exception(f"Method {self._name}() should be public"))
        if not self.returns_none:
            errors.append(Exception(f"Method {self._name}() should return None"))

    def validate_public_void_no_arg(
        self, is_static: bool, errors: list[Exception]
    ) -> None:
        """Like :meth:`validate_public_void`, and also reject parameters."""
        self.validate_public_void(is_static, errors)
        if self._parameter_types:
            errors.append(Exception(f"Method {self._name} should have no parameters"))

    def is_shadowed_by(self, other: FrameworkMethod) -> bool:
        return (
            other.name == self._name
            and other.parameter_types == self._parameter_types
        )

    def _collect_tags(self) -> tuple[Tag, ...]:
        own = declared_tags(self._function)
        if not own:
            return ()
        tags = list(own)
        for klass in self._declaring_class.__mro__[1:]:
            for tag in self._ancestor_tags(klass):
                if not any(type(each) is type(tag) for each in tags):
                    tags.append(tag)
        return tuple(tags)

    def _ancestor_tags(self, klass: type) -> tuple[Tag, ...]:
        raw = vars(klass).get(self._name)
        if not is_method_like(raw):
            return ()
        if visibility_of(self._name, klass) is Visibility.PRIVATE:
            return ()
        function = _unwrap(raw)
        if _parameter_types(raw, inspect.signature(function)) != self._parameter_types:
            return ()
        return declared_tags(function)

    def __repr__(self) -> str:
        return (
            f"<FrameworkMethod {self._declaring_class.__module__}."
            f"{self._declaring_class.__qualname__}.{self._name}{self._signature}>"
        )


class FrameworkField(FrameworkMember["FrameworkField"]):
    """A field on a test class, tagged through ``typing.Annotated`` metadata."""

    def __init__(self, declaring_class: type, name: str, annotation: Any) -> None:
        if declaring_class is None:
            raise TypeError(
                "FrameworkField cannot be created without an underlying field."
            )
        self._declaring_class = declaring_class
        self._name = name
        self._annotation = annotation
        self._type, self._tags, self._is_static = unpack_field_annotation(annotation)

    @property
    def annotation(self) -> Any:
        return self._annotation

    @property
    def type(self) -> Any:
        return self._type

    @property
    def is_static(self) -> bool:
        return self._is_static

    def is_shadowed_by(self, other: FrameworkField) -> bool:
        return other.name == self._name

    def get(self, target: Any) -> Any:
        """Read the field from ``target``, or from the class if it is static.

        Raises ``AttributeError`` when the field has no value.
        """
        source = self._declaring_class if self._is_static else target
        return getattr(source, self._name)

    def set(self, target: Any, value: Any) -> None:
        source = self._declaring_class if self._is_static else target
        setattr(source, self._name, value)

    def __repr__(self) -> str:
        return (
            f"<FrameworkField {self._declaring_class.__module__}."
            f"{self._declaring_class.__qualname__}.{self._name}>"
        )
