# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Runtime configuration for the omnigate pipeline.

Settings are loaded from environment variables (prefix ``OMNIGATE_``) or
from a YAML file. Every value has a default, so ``OmniGateSettings()`` is a
valid configuration.

Environment variables:
    OMNIGATE_DEFAULT_CEILING: complexity ceiling (default ``logarithmic``)
    OMNIGATE_ALLOW_FORWARD_REFERENCES: allow dependencies on not-yet-inserted
        nodes (default ``true``)
    OMNIGATE_DEPLOY_TIMEOUT_SECONDS: abandon deployments after this long
    OMNIGATE_MAX_CONCURRENCY: concurrent runs in ``run_many`` (default 4)
    OMNIGATE_MAX_RUN_HISTORY: recent runs kept by the runner (default 256)
    OMNIGATE_COST_FACTOR: constant factor on declared-cost bounds (default 1.0)
    OMNIGATE_POLYNOMIAL_DEGREE: exponent of the polynomial bound (default 2)
    OMNIGATE_LATENCY_BUDGET_MS: latency ceiling for the performance check
    OMNIGATE_LOG_LEVEL: log level for the CLI (default ``INFO``)

Example:
    # Load from YAML
    settings = OmniGateSettings.from_yaml("/path/to/omnigate.yaml")

    # Load from environment
    settings = OmniGateSettings()
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from omnigate.enums import EnumComplexityClass


class EnumLogLevel(str, Enum):
    """Log level enumeration for runtime configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class OmniGateSettings(BaseSettings):
    """Pydantic Settings for the pipeline, loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="OMNIGATE_",
        extra="ignore",
    )

    default_ceiling: EnumComplexityClass = Field(
        default=EnumComplexityClass.LOGARITHMIC,
        description="Complexity ceiling used when a run does not pass one",
    )
    allow_forward_references: bool = Field(
        default=True,
        description="Accept dependencies on ids that are not inserted yet",
    )
    deploy_timeout_seconds: float | None = Field(
        default=None,
        gt=0.0,
        description="Abandon a run whose deployment takes longer than this",
    )
    max_concurrency: int = Field(
        default=4,
        ge=1,
        le=256,
        description="Maximum number of runs processed concurrently by run_many",
    )
    max_run_history: int = Field(
        default=256,
        ge=0,
        le=100_000,
        description="Most recent runs kept for PipelineRunner.runs() (0 keeps none)",
    )
    cost_factor: float = Field(
        default=1.0,
        gt=0.0,
        description="Constant factor applied to declared-cost bounds",
    )
    polynomial_degree: int = Field(
        default=2,
        ge=1,
        le=16,
        description="Exponent of the polynomial declared-cost bound",
    )
    latency_budget_ms: float | None = Field(
        default=None,
        gt=0.0,
        description="Latency ceiling for the deployment performance check",
    )
    log_level: EnumLogLevel = Field(
        default=EnumLogLevel.INFO,
        description="Logging level used by the CLI",
    )

    @field_validator("default_ceiling", mode="before")
    @classmethod
    def _parse_ceiling(cls, value: Any) -> EnumComplexityClass:
        return EnumComplexityClass.parse(value)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value

    @property
    def latency_budget(self) -> timedelta | None:
        """Latency budget as a timedelta, or None when unset."""
        if self.latency_budget_ms is None:
            return None
        return timedelta(milliseconds=self.latency_budget_ms)

    @classmethod
    def from_yaml(cls, path: str | Path) -> OmniGateSettings:
        """Load settings from a YAML mapping.

        Keys are the field names without the env prefix. Environment
        variables are not consulted for keys present in the file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file does not hold a mapping.
        """
        config_path = Path(path)
        with config_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            msg = f"Settings file {config_path} must contain a mapping"
            raise ValueError(msg)
        return cls(**data)


__all__ = ["EnumLogLevel", "OmniGateSettings"]
