"""Tests for the TestClassCache."""
from __future__ import annotations

import threading

from TestModel.model.cache import TestClassCache
from TestModel.shared.config import ModelConfig
from TestModel.tagging.tags import After, Before


class Fixture:
    @Before()
    def first(self) -> None:
        pass


class ChildFixture(Fixture):
    @Before()
    def second(self) -> None:
        pass


class TestTestClassCache:
    def test_returns_same_model_for_same_class(self) -> None:
        cache = TestClassCache()
        assert cache.get(Fixture) is cache.get(Fixture)
        assert len(cache) == 1

    def test_separate_models_per_class(self) -> None:
        cache = TestClassCache()
        assert cache.get(Fixture) is not cache.get(ChildFixture)
        assert Fixture in cache
        assert ChildFixture in cache

    def test_clear_forgets_models(self) -> None:
        cache = TestClassCache()
        first = cache.get(Fixture)
        cache.clear()
        assert Fixture not in cache
        assert cache.get(Fixture) is not first

    def test_models_use_cache_config(self) -> None:
        cache = TestClassCache(ModelConfig(reverse_order_tags=frozenset({After})))
        model = cache.get(ChildFixture)
        assert [m.name for m in model.get_annotated_methods(Before)] == ["second", "first"]

    def test_concurrent_get_builds_once(self) -> None:
        cache = TestClassCache()
        results = []

        def worker() -> None:
            results.append(cache.get(ChildFixture))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len({id(r) for r in results}) == 1
