"""Creates objects through their zero-argument constructor."""
from __future__ import annotations

import inspect
from typing import TypeVar

from TestModel.shared.errors import InstantiationError

T = TypeVar("T")


class ObjectFactory:
    """The single construction path for filter factories and injected test instances."""

    def create_object_with_class(self, klass: type[T]) -> T:
        """Create an object of ``klass``, which must accept no arguments."""
        if not isinstance(klass, type):
            msg = f"{klass!r} is not a class"
            raise InstantiationError(msg)
        if inspect.isabstract(klass):
            msg = f"{klass.__qualname__} is abstract"
            raise InstantiationError(msg)
        try:
            signature = inspect.signature(klass)
        except (TypeError, ValueError):
            signature = None
        if signature is not None:
            try:
                signature.bind()
            except TypeError as exc:
                msg = f"{klass.__qualname__} has no zero-argument constructor"
                raise InstantiationError(msg) from exc
        try:
            return klass()
        except Exception as exc:
            msg = f"Could not instantiate {klass.__qualname__}: {exc}"
            raise InstantiationError(msg) from exc
