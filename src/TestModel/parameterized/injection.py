"""Parameterized tests: injecting parameters into fields or the constructor."""
from __future__ import annotations

import types
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from TestModel.reflection.object_factory import ObjectFactory
from TestModel.shared.errors import ParameterError
from TestModel.tagging.tags import Parameter
from TestModel.validation.validators import (
    SinglePublicConstructorValidator,
    TestClassValidator,
    validate_all,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from TestModel.model.members import FrameworkField, FrameworkMethod
    from TestModel.model.testclass import TestClass

OBJECT_FACTORY = ObjectFactory()


@dataclass(frozen=True)
class TestWithParameters:
    """One parameter set of a parameterized test class."""

    __test__ = False

    name: str
    test_class: TestClass
    parameters: tuple[Any, ...]


def _parameter_index(field: FrameworkField) -> int:
    return field.get_tag(Parameter).value  # type: ignore[union-attr]


def _is_plain_class(annotation: Any) -> bool:
    return isinstance(annotation, type) and not isinstance(annotation, types.GenericAlias)


class ParametersFieldsValidator:
    """Validates the ``Parameter``-tagged fields against the available parameters."""

    def __init__(self, parameters: Sequence[Any]) -> None:
        self._parameters = parameters

    def validate_test_class(self, test_class: TestClass) -> list[Exception]:
        fields = test_class.get_annotated_fields(Parameter)
        if not fields:
            return []
        errors: list[Exception] = []
        if len(fields) != len(self._parameters):
            errors.append(Exception(
                "Wrong number of parameters and @Parameter fields. "
                f"@Parameter fields counted: {len(fields)}, "
                f"available parameters: {len(self._parameters)}."
            ))
            return errors
        used = [0] * len(fields)
        for each in fields:
            index = _parameter_index(each)
            if index < 0 or index > len(fields) - 1:
                errors.append(Exception(
                    f"Invalid @Parameter value: {index}. "
                    f"@Parameter fields counted: {len(fields)}. "
                    f"Please use an index between 0 and {len(fields) - 1}."
                ))
            else:
                used[index] += 1
        for index, count in enumerate(used):
            if count == 0:
                errors.append(Exception(f"@Parameter({index}) is never used."))
            elif count > 1:
                errors.append(Exception(
                    f"@Parameter({index}) is used more than once ({count})."
                ))
        return errors


class ParameterizedTest:
    """Creates and names the instances of one parameter set."""

    def __init__(self, test: TestWithParameters) -> None:
        self._test = test

    @property
    def name(self) -> str:
        return self._test.name

    @property
    def test_class(self) -> TestClass:
        return self._test.test_class

    def validators(self) -> list[TestClassValidator]:
        return [
            ParametersFieldsValidator(self._test.parameters),
            SinglePublicConstructorValidator(),
        ]

    def validate(self) -> list[Exception]:
        return validate_all(self.test_class, self.validators())

    def fields_are_annotated(self) -> bool:
        return bool(self.test_class.get_annotated_fields(Parameter))

    def test_name(self, method: FrameworkMethod) -> str:
        return method.name + self.name

    def create_test(self) -> Any:
        if self.fields_are_annotated():
            return self._create_test_using_field_injection()
        return self._create_test_using_constructor_injection()

    def _create_test_using_constructor_injection(self) -> Any:
        constructor = self.test_class.get_only_constructor()
        return constructor.new_instance(*self._test.parameters)

    def _create_test_using_field_injection(self) -> Any:
        klass = self.test_class.klass
        instance = OBJECT_FACTORY.create_object_with_class(klass)
        for each in self.test_class.get_annotated_fields(Parameter):
            value = self._test.parameters[_parameter_index(each)]
            expected = each.type
            if _is_plain_class(expected) and not isinstance(value, expected):
                msg = (
                    f"{self.test_class.name}: Trying to set {each.name} "
                    f"with the value {value!r} that is not the right type "
                    f"({type(value).__name__} instead of {expected.__name__})."
                )
                raise ParameterError(msg)
            each.set(instance, value)
        return instance
