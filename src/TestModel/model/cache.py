"""Shared cache of test class models keyed by class identity."""
from __future__ import annotations

import logging
import threading

from TestModel.model.testclass import TestClass
from TestModel.shared.config import DEFAULT_CONFIG, ModelConfig

logger = logging.getLogger(__name__)


class TestClassCache:
    """Builds each :class:`TestClass` once and hands out the shared instance.

    Building is serialized by a lock so concurrent callers never build the
    same class twice.
    """

    __test__ = False

    def __init__(self, config: ModelConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG
        self._models: dict[type, TestClass] = {}
        self._lock = threading.Lock()

    def get(self, klass: type) -> TestClass:
        model = self._models.get(klass)
        if model is not None:
            logger.debug("[TESTMODEL] event=cache_hit class=%s", model.name)
            return model
        with self._lock:
            model = self._models.get(klass)
            if model is None:
                model = TestClass(klass, self._config)
                self._models[klass] = model
                logger.debug("[TESTMODEL] event=cache_miss class=%s", model.name)
        return model

    def clear(self) -> None:
        with self._lock:
            self._models.clear()

    def __contains__(self, klass: object) -> bool:
        return klass in self._models

    def __len__(self) -> int:
        return len(self._models)
