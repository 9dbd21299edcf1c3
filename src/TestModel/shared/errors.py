"""Custom exception hierarchy for the test class model."""
from __future__ import annotations


class TestModelError(Exception):
    """Base exception for the test class model."""

    __test__ = False


class ConfigurationError(TestModelError):
    """Raised when a test class cannot be modelled, e.g. it has several public constructors."""


class InstantiationError(TestModelError):
    """Raised when a class cannot be instantiated through its zero-argument constructor."""


class FilterNotCreatedError(TestModelError):
    """Raised when a filter specification cannot be turned into a filter."""


class ParameterError(TestModelError):
    """Raised when a parameter cannot be injected into a test instance."""


class MemberInvocationError(TestModelError):
    """Raised when a tagged method fails while its results are being collected."""

    def __init__(self, member_name: str, cause: BaseException) -> None:
        super().__init__(f"Exception in {member_name}: {cause!r}")
        self.member_name = member_name
        self.cause = cause


class FrameworkInternalError(RuntimeError):
    """Raised when the model contradicts itself. Not a user error."""
