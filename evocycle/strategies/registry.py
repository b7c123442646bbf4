"""Strategy Registry — central registry of every simulated strategy config."""

from __future__ import annotations

import logging

from evocycle.exceptions import ConfigurationNotFoundError
from evocycle.strategies.schema import (
    RegistryKind,
    RegistrySizes,
    StrategyConfig,
    StrategyListing,
)

logger = logging.getLogger(__name__)


class StrategyRegistries:
    """Four name-keyed registries, one per strategy kind.

    Configs are registered once (normally via configure()) and then only
    looked up. A config is immutable, so get() can hand out the stored
    instance.
    """

    def __init__(self) -> None:
        self._configs: dict[RegistryKind, dict[str, StrategyConfig]] = {
            kind: {} for kind in RegistryKind
        }
        self._configured = False

    def configure(self) -> None:
        """Populate every registry with the built-in strategy set."""
        from evocycle.strategies.builtins import register_builtin_strategies

        register_builtin_strategies(self)
        self._configured = True
        logger.debug("Strategy registries configured: %s", self.sizes().model_dump())

    @property
    def is_configured(self) -> bool:
        return self._configured

    def register(self, config: StrategyConfig) -> None:
        self._configs[config.kind][config.name] = config

    def unregister(self, kind: RegistryKind, name: str) -> None:
        self._configs[kind].pop(name, None)

    def get(self, kind: RegistryKind, name: str) -> StrategyConfig:
        """Look up a config by kind and name."""
        config = self._configs[kind].get(name)
        if config is None:
            raise ConfigurationNotFoundError(kind.value, name)
        return config

    def names(self, kind: RegistryKind) -> list[str]:
        return list(self._configs[kind])

    def list(self, kind: RegistryKind | None = None) -> list[StrategyListing]:
        """Flat listing of configs, optionally limited to one kind."""
        kinds = [kind] if kind else list(RegistryKind)
        listings = []
        for k in kinds:
            for config in self._configs[k].values():
                listings.append(StrategyListing(
                    kind=k,
                    name=config.name,
                    label=config.label,
                    parameters=config.model_dump(
                        exclude={"name", "label"}, exclude_defaults=True
                    ),
                ))
        return listings

    def sizes(self) -> RegistrySizes:
        return RegistrySizes(**{
            kind.value: len(configs) for kind, configs in self._configs.items()
        })
