"""Custom exception hierarchy for evocycle."""


class EvocycleError(Exception):
    """Base for all evocycle errors."""


class ConfigurationNotFoundError(EvocycleError):
    """No strategy config with the given name exists in a registry."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"No {kind} strategy named '{name}'")
        self.kind = kind
        self.name = name


class ExecutionError(EvocycleError):
    """A strategy simulator failed unexpectedly during a phase."""


class EngineStateError(EvocycleError):
    """The engine was used before it was initialized."""


class LifecycleError(EvocycleError):
    """Invalid phase or cycle status transition."""
