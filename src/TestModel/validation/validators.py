"""Validators reporting problems with the shape of a test class."""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from TestModel.model.testclass import TestClass
    from TestModel.tagging.tags import Tag


@runtime_checkable
class TestClassValidator(Protocol):
    """Protocol for validators. Each returns the problems it found, possibly none."""

    def validate_test_class(self, test_class: TestClass) -> list[Exception]: ...


class SinglePublicConstructorValidator:
    """Validates that a test class has one and only one public constructor.

    More than one cannot happen here: building the ``TestClass`` already
    rejects it.
    """

    def validate_test_class(self, test_class: TestClass) -> list[Exception]:
        if not test_class.get_public_constructors():
            return [Exception("Test class should have exactly one public constructor")]
        return []


class MethodShapeValidator:
    """Validates that methods carrying ``tag_type`` are public, return None and take no arguments."""

    def __init__(self, tag_type: type[Tag], is_static: bool = False) -> None:
        self.tag_type = tag_type
        self.is_static = is_static

    def validate_test_class(self, test_class: TestClass) -> list[Exception]:
        errors: list[Exception] = []
        for method in test_class.get_annotated_methods(self.tag_type):
            method.validate_public_void_no_arg(self.is_static, errors)
        return errors


def validate_all(
    test_class: TestClass, validators: list[TestClassValidator]
) -> list[Exception]:
    """Run every validator and concatenate their errors."""
    errors: list[Exception] = []
    for validator in validators:
        errors.extend(validator.validate_test_class(test_class))
    return errors
