"""Class model: a test class with its tagged methods and fields resolved."""
from __future__ import annotations

import enum
import inspect
import logging
import typing
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from TestModel.model.members import FrameworkField, FrameworkMethod
from TestModel.model.provider import DeclaredMemberProvider, ReflectiveMemberProvider
from TestModel.model.registry import MemberRegistry
from TestModel.shared.config import DEFAULT_CONFIG, ModelConfig
from TestModel.shared.errors import (
    ConfigurationError,
    FrameworkInternalError,
    MemberInvocationError,
)
from TestModel.tagging.tags import Tag, declared_tags

if TYPE_CHECKING:
    from TestModel.model.members import FrameworkMember

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MemberKind(enum.Enum):
    METHOD = "method"
    FIELD = "field"


@dataclass(frozen=True)
class Constructor:
    """A public way of constructing ``declaring_class``.

    ``signature`` is ``None`` when Python cannot introspect it, which happens
    for some extension types.
    """

    declaring_class: type
    signature: inspect.Signature | None

    @property
    def parameter_count(self) -> int:
        if self.signature is None:
            return 0
        return len(self.signature.parameters)

    def new_instance(self, *args: Any, **kwargs: Any) -> Any:
        return self.declaring_class(*args, **kwargs)


def public_constructors(klass: type) -> tuple[Constructor, ...]:
    """The public constructors of ``klass``.

    An abstract class has none. An ``__init__`` declaring ``typing.overload``
    signatures contributes one constructor per overload. Any other class has
    exactly one.
    """
    if inspect.isabstract(klass):
        return ()
    init = klass.__init__
    if inspect.isfunction(init):
        overloads = typing.get_overloads(init)
        if overloads:
            return tuple(
                Constructor(klass, _without_self(inspect.signature(each)))
                for each in overloads
            )
    return (Constructor(klass, _class_signature(klass)),)


def _without_self(signature: inspect.Signature) -> inspect.Signature:
    params = list(signature.parameters.values())[1:]
    return signature.replace(parameters=params)


def _class_signature(klass: type) -> inspect.Signature | None:
    try:
        return inspect.signature(klass)
    except (TypeError, ValueError):
        return None


def _hierarchy(klass: type | None) -> tuple[type, ...]:
    if klass is None:
        return ()
    return klass.__mro__


class TestClass:
    """Wraps a class to be run, providing method validation and tag searching.

    Each construction walks the whole class hierarchy, which is not free.
    Share instances where possible, e.g. through
    :class:`TestModel.model.cache.TestClassCache`.
    """

    __test__ = False

    def __init__(
        self,
        klass: type | None,
        config: ModelConfig | None = None,
        provider: DeclaredMemberProvider | None = None,
    ) -> None:
        self._klass = klass
        self._config = config or DEFAULT_CONFIG
        if klass is not None and len(public_constructors(klass)) > 1:
            raise ConfigurationError("Test class can only have one constructor")

        provider = provider or ReflectiveMemberProvider()
        methods: list[FrameworkMethod] = []
        fields: list[FrameworkField] = []
        for each_class in _hierarchy(klass):
            methods.extend(provider.declared_methods(each_class))
            fields.extend(provider.declared_fields(each_class))

        reverse = self._config.reverse_order_tags
        self._methods: MemberRegistry[FrameworkMethod] = MemberRegistry(methods, reverse)
        self._fields: MemberRegistry[FrameworkField] = MemberRegistry(fields, reverse)
        logger.debug(
            "[TESTMODEL] event=class_built class=%s methods=%d fields=%d",
            self.name,
            len(self._methods),
            len(self._fields),
        )

    @property
    def klass(self) -> type | None:
        """The underlying class."""
        return self._klass

    @property
    def name(self) -> str:
        if self._klass is None:
            return "None"
        return f"{self._klass.__module__}.{self._klass.__qualname__}"

    @property
    def config(self) -> ModelConfig:
        return self._config

    def get_annotated_members(
        self, kind: MemberKind, tag_type: type[Tag] | None = None
    ) -> tuple[FrameworkMember[Any], ...]:
        registry = self._methods if kind is MemberKind.METHOD else self._fields
        if tag_type is None:
            return registry.annotated_members()
        return registry.members_with_tag(tag_type)

    def get_annotated_methods(
        self, tag_type: type[Tag] | None = None
    ) -> tuple[FrameworkMethod, ...]:
        """Tagged methods of this class and its ancestors, overrides resolved.

        With ``tag_type``, only the methods carrying it.
        """
        if tag_type is None:
            return self._methods.annotated_members()
        return self._methods.members_with_tag(tag_type)

    def get_annotated_fields(
        self, tag_type: type[Tag] | None = None
    ) -> tuple[FrameworkField, ...]:
        """Tagged fields of this class and its ancestors, shadowing resolved.

        With ``tag_type``, only the fields carrying it.
        """
        if tag_type is None:
            return self._fields.annotated_members()
        return self._fields.members_with_tag(tag_type)

    def get_public_constructors(self) -> tuple[Constructor, ...]:
        if self._klass is None:
            return ()
        return public_constructors(self._klass)

    def get_only_constructor(self) -> Constructor:
        """Return the only public constructor.

        Raises ``AssertionError`` if there are more or fewer than one.
        """
        constructors = self.get_public_constructors()
        if len(constructors) != 1:
            msg = f"expected:<1> but was:<{len(constructors)}>"
            raise AssertionError(msg)
        return constructors[0]

    def get_tags(self) -> tuple[Tag, ...]:
        """Tags declared on the class itself."""
        if self._klass is None:
            return ()
        return declared_tags(self._klass)

    def is_public(self) -> bool:
        if self._klass is None:
            return False
        return not self._klass.__name__.startswith("_")

    def get_annotated_field_values(
        self, target: Any, tag_type: type[Tag], value_type: type[T]
    ) -> list[T]:
        results: list[T] = []
        for each in self.get_annotated_fields(tag_type):
            try:
                value = each.get(target)
            except AttributeError as exc:
                raise FrameworkInternalError(
                    "How did get_annotated_fields return a field we couldn't access?"
                ) from exc
            if isinstance(value, value_type):
                results.append(value)
        return results

    def get_annotated_method_values(
        self, target: Any, tag_type: type[Tag], value_type: type[T]
    ) -> list[T]:
        results: list[T] = []
        for each in self.get_annotated_methods(tag_type):
            try:
                value = each.invoke_explosively(target)
            except Exception as exc:
                raise MemberInvocationError(each.name, exc) from exc
            if isinstance(value, value_type):
                results.append(value)
        return results

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TestClass):
            return self._klass is other._klass
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._klass)

    def __repr__(self) -> str:
        return f"TestClass({self.name})"
