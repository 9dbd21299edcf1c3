from __future__ import annotations

import os
from dataclasses import dataclass, field

from TestModel.tagging.tags import Before, BeforeClass

FILTER_ENV_VAR = "TESTMODEL_FILTER"
FILTER_SPEC_SEPARATOR = ";"


@dataclass(frozen=True)
class ModelConfig:
    """Configuration for building test class models."""

    reverse_order_tags: frozenset[type] = field(
        default_factory=lambda: frozenset({Before, BeforeClass})
    )


DEFAULT_CONFIG = ModelConfig()


@dataclass(frozen=True)
class PluginConfig:
    """Configuration for the runner integrations."""

    filter_specs: tuple[str, ...] = ()

    @classmethod
    def from_environment(cls) -> PluginConfig:
        raw = os.environ.get(FILTER_ENV_VAR, "")
        specs = tuple(
            s.strip() for s in raw.split(FILTER_SPEC_SEPARATOR) if s.strip()
        )
        return cls(filter_specs=specs)
