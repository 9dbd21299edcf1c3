"""Discovery of the members a single class declares."""
from __future__ import annotations

import inspect
import logging
import sys
from typing import Any, Protocol, runtime_checkable

from TestModel.model.members import FrameworkField, FrameworkMethod, is_method_like
from TestModel.shared.errors import ConfigurationError

logger = logging.getLogger(__name__)


@runtime_checkable
class DeclaredMemberProvider(Protocol):
    """Protocol for listing the members declared directly in a class body.

    Implementations must not include inherited members; the class model
    walks the hierarchy itself.
    """

    def declared_methods(self, klass: type) -> list[FrameworkMethod]: ...

    def declared_fields(self, klass: type) -> list[FrameworkField]: ...


class ReflectiveMemberProvider:
    """Reads methods from the class ``__dict__`` and fields from its annotations.

    Methods keep their definition order. Fields are sorted by name.
    """

    def declared_methods(self, klass: type) -> list[FrameworkMethod]:
        return [
            FrameworkMethod(klass, name)
            for name, value in vars(klass).items()
            if is_method_like(value)
        ]

    def declared_fields(self, klass: type) -> list[FrameworkField]:
        annotations = _resolved_annotations(klass)
        return [
            FrameworkField(klass, name, annotations[name])
            for name in sorted(annotations)
        ]


def _resolved_annotations(klass: type) -> dict[str, Any]:
    """Own annotations of ``klass`` with string annotations evaluated.

    A string that cannot be evaluated stays a string and carries no tags,
    unless it spells out ``Annotated``, in which case tags would be lost.
    """
    try:
        return inspect.get_annotations(klass, eval_str=True)
    except Exception:
        logger.debug(
            "[TESTMODEL] event=annotations_fallback class=%s", klass.__qualname__
        )
    raw = inspect.get_annotations(klass)
    module = sys.modules.get(klass.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns = dict(vars(klass))
    resolved: dict[str, Any] = {}
    for name, annotation in raw.items():
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, globalns, localns)  # noqa: S307
            except Exception as exc:
                if "Annotated" in annotation:
                    msg = (
                        f"Cannot resolve the annotation of "
                        f"{klass.__qualname__}.{name}: {annotation!r}"
                    )
                    raise ConfigurationError(msg) from exc
                logger.debug(
                    "[TESTMODEL] event=unresolved_annotation class=%s field=%s",
                    klass.__qualname__,
                    name,
                )
        resolved[name] = annotation
    return resolved
