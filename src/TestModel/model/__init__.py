"""Model bounded context: test classes, their members and tag resolution."""

from TestModel.model.cache import TestClassCache
from TestModel.model.members import (
    FrameworkField,
    FrameworkMember,
    FrameworkMethod,
    Visibility,
)
from TestModel.model.provider import DeclaredMemberProvider, ReflectiveMemberProvider
from TestModel.model.registry import MemberRegistry
from TestModel.model.testclass import (
    Constructor,
    MemberKind,
    TestClass,
    public_constructors,
)

__all__ = [
    "Constructor",
    "DeclaredMemberProvider",
    "FrameworkField",
    "FrameworkMember",
    "FrameworkMethod",
    "MemberKind",
    "MemberRegistry",
    "ReflectiveMemberProvider",
    "TestClass",
    "TestClassCache",
    "Visibility",
    "public_constructors",
]
