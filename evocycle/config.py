"""Global configuration — loaded from environment variables."""

from pydantic_settings import BaseSettings


class EvocycleSettings(BaseSettings):
    log_level: str = "INFO"
    log_format: str = "console"  # console|json

    # Cycle defaults
    default_cycle_type: str = "comprehensive"
    default_duration_seconds: float = 30.0
    phase_pause_seconds: float = 1.0  # courtesy pause between phases
    base_consciousness: float = 1.0
    event_history_limit: int = 500

    # Collaborator model state read by the simulators
    quantum_coherence: float = 0.8
    superposition_states: int = 1
    entanglements: int = 0
    terra_consciousness_level: float = 1.0
    earth_connection: float = 0.5
    cosmic_alignment: float = 0.5

    model_config = {"env_prefix": "EVOCYCLE_"}


settings = EvocycleSettings()
