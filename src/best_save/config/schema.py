"""Pydantic configuration models for planner settings."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from best_save.optimisation.sequence import SequenceRules


class ConstraintsConfig(BaseModel):
    """Operating limits for the controlled load.

    Malformed combinations are rejected here so the planner itself never has
    to second-guess its inputs.
    """

    max_minutes_off: int = Field(60, ge=0)  # 0 = never turn off
    min_minutes_off: int = Field(5, ge=1)
    recovery_percentage: float = Field(50.0, ge=0.0, le=100.0)
    recovery_max_minutes: int | None = Field(None, ge=0)  # None = unbounded
    min_saving: float = 0.0  # Average saving per slot a candidate must beat

    @field_validator("recovery_max_minutes", mode="before")
    @classmethod
    def _blank_means_unbounded(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _check_off_window(self) -> ConstraintsConfig:
        if self.max_minutes_off > 0 and self.min_minutes_off > self.max_minutes_off:
            raise ValueError(
                f"min_minutes_off ({self.min_minutes_off}) cannot exceed "
                f"max_minutes_off ({self.max_minutes_off})"
            )
        return self

    def rules(self) -> SequenceRules:
        return SequenceRules(
            max_minutes_off=self.max_minutes_off,
            min_minutes_off=self.min_minutes_off,
            recovery_percentage=self.recovery_percentage,
            recovery_max_minutes=self.recovery_max_minutes,
        )


class TrailingConfig(BaseModel):
    """State of the load at the end of the previous period."""

    last_value: bool | None = None  # None = unknown, no trailing context
    last_count: int = 0


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "json"
    file: str = ""


class AppConfig(BaseModel):
    """Root configuration model containing all planner settings."""

    constraints: ConstraintsConfig = ConstraintsConfig()
    trailing: TrailingConfig = TrailingConfig()
    logging: LoggingConfig = LoggingConfig()
