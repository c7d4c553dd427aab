"""Configuration management for the campaign supervisor."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_log_level(name: str, default: str) -> str:
    value = os.getenv(name, default).strip().upper()
    return value if value in LOG_LEVELS else default


@dataclass(frozen=True)
class SimulationConfig:
    """Knobs for the simulated agent behaviour."""

    latency_scale: float = 1.0
    outreach_success_rate: float = 0.7
    outreach_response_rate: float = 0.15
    payment_success_rate: float = 0.95
    outreach_batch_size: int = 10
    creator_pool_size: int = 50
    discovery_result_limit: int = 10
    seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> SimulationConfig:
        seed = os.getenv("INFLUENCERFLOW_SEED")
        return cls(
            latency_scale=float(os.getenv("INFLUENCERFLOW_LATENCY_SCALE", "1.0")),
            outreach_success_rate=float(os.getenv("INFLUENCERFLOW_OUTREACH_SUCCESS_RATE", "0.7")),
            outreach_response_rate=float(os.getenv("INFLUENCERFLOW_OUTREACH_RESPONSE_RATE", "0.15")),
            payment_success_rate=float(os.getenv("INFLUENCERFLOW_PAYMENT_SUCCESS_RATE", "0.95")),
            outreach_batch_size=int(os.getenv("INFLUENCERFLOW_OUTREACH_BATCH_SIZE", "10")),
            creator_pool_size=int(os.getenv("INFLUENCERFLOW_CREATOR_POOL_SIZE", "50")),
            discovery_result_limit=int(os.getenv("INFLUENCERFLOW_DISCOVERY_RESULT_LIMIT", "10")),
            seed=int(seed) if seed else None,
        )


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables."""

    environment: str = "development"
    log_level: str = "INFO"
    log_json: bool = False
    host: str = "127.0.0.1"
    port: int = 8000
    simulation: SimulationConfig = field(default_factory=SimulationConfig)

    @classmethod
    def from_env(cls) -> Config:
        """Load configuration from environment variables."""
        return cls(
            environment=os.getenv("ENVIRONMENT", "development"),
            log_level=_env_log_level("LOG_LEVEL", "INFO"),
            log_json=_env_bool("LOG_JSON", False),
            host=os.getenv("INFLUENCERFLOW_HOST", "127.0.0.1"),
            port=int(os.getenv("INFLUENCERFLOW_PORT", "8000")),
            simulation=SimulationConfig.from_env(),
        )


# Global config instance
config = Config.from_env()
