"""Turns filter specifications into filters.

A filter specification has the form ``"package.module.FilterFactory=args"``
or ``"package.module.FilterFactory"``; the latter passes empty arguments.
Registered aliases such as ``"include-tags=smoke"`` are accepted too.
"""
from __future__ import annotations

import importlib
import logging
from typing import Any

from TestModel.filtering.filter import Filter, FilterFactory, FilterFactoryParams
from TestModel.filtering.registry import FilterFactoryRegistry, default_registry
from TestModel.reflection.object_factory import ObjectFactory
from TestModel.shared.errors import FilterNotCreatedError

logger = logging.getLogger(__name__)

OBJECT_FACTORY = ObjectFactory()


def parse_filter_spec(filter_spec: str) -> tuple[str, str]:
    """Split a filter spec into ``(identifier, args)`` at the first ``=``."""
    identifier, _, args = filter_spec.partition("=")
    return identifier, args


def create_filter_from_filter_spec(
    filter_spec: str,
    registry: FilterFactoryRegistry | None = None,
) -> Filter:
    """Create a filter from ``"identifier[=args]"``."""
    identifier, args = parse_filter_spec(filter_spec)
    return create_filter(identifier, FilterFactoryParams(args), registry)


def create_filter(
    factory: str | type,
    params: FilterFactoryParams | str = "",
    registry: FilterFactoryRegistry | None = None,
) -> Filter:
    """Create a filter with the factory named (or given) by ``factory``.

    Raises ``FilterNotCreatedError`` when the factory cannot be found or
    instantiated, or rejects ``params``.
    """
    if isinstance(params, str):
        params = FilterFactoryParams(params)
    if isinstance(factory, str):
        filter_factory = create_filter_factory(factory, registry)
    else:
        filter_factory = create_filter_factory_from_class(factory)
    try:
        created = filter_factory.create_filter(params)
    except FilterNotCreatedError:
        raise
    except Exception as exc:
        raise FilterNotCreatedError(str(exc)) from exc
    logger.debug(
        "[TESTMODEL] event=filter_created factory=%s args=%r",
        type(filter_factory).__qualname__,
        params.args,
    )
    return created


def create_filter_factory(
    identifier: str,
    registry: FilterFactoryRegistry | None = None,
) -> FilterFactory:
    try:
        factory_class = resolve_factory_class(identifier, registry)
    except Exception as exc:
        raise FilterNotCreatedError(str(exc)) from exc
    return create_filter_factory_from_class(factory_class)


def create_filter_factory_from_class(factory_class: type) -> FilterFactory:
    try:
        factory = OBJECT_FACTORY.create_object_with_class(factory_class)
    except Exception as exc:
        raise FilterNotCreatedError(str(exc)) from exc
    if not isinstance(factory, FilterFactory):
        msg = f"{factory_class.__qualname__} is not a filter factory"
        raise FilterNotCreatedError(msg)
    return factory


def resolve_factory_class(
    identifier: str,
    registry: FilterFactoryRegistry | None = None,
) -> type:
    """Resolve an alias or an import path to a filter factory class.

    Import paths are ``package.module.Class`` (nested classes allowed) or
    ``package.module:Class``.
    """
    registry = registry or default_registry
    identifier = identifier.strip()
    if registry.is_available(identifier):
        return registry.get(identifier)
    obj = _import_object(identifier)
    if not isinstance(obj, type) or not issubclass(obj, FilterFactory):
        msg = f"{identifier} is not a filter factory class"
        raise TypeError(msg)
    return obj


def _import_object(path: str) -> Any:
    if ":" in path:
        module_name, _, attribute_path = path.partition(":")
        return _get_attributes(importlib.import_module(module_name), attribute_path)

    parts = path.split(".")
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            if exc.name is not None and module_name.startswith(exc.name):
                continue
            raise
        return _get_attributes(module, ".".join(parts[split:]))
    msg = f"Cannot resolve {path!r}: no importable module"
    raise ImportError(msg)


def _get_attributes(obj: Any, attribute_path: str) -> Any:
    for name in attribute_path.split("."):
        obj = getattr(obj, name)
    return obj
