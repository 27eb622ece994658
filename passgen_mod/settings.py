from __future__ import annotations

import pydantic
from pydantic import Field, field_validator
from pydantic_core import PydanticUseDefault
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ValidationError


# Bounds exposed by the sliders; the core itself accepts any positive value.
MIN_LENGTH = 8
MAX_LENGTH = 32
MIN_ITERATIONS = 10_000
MAX_ITERATIONS = 500_000

ENV_PREFIX = "PASSGEN_"


class GeneratorSettings(BaseSettings):
    """Default parameters, overridable with PASSGEN_SALT / PASSGEN_LENGTH / PASSGEN_ITERATIONS."""

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_ignore_empty=True, frozen=True)

    salt: str = "obsidian-salt"
    length: int = Field(default=16, gt=0)
    iterations: int = Field(default=100_000, gt=0)

    @field_validator("salt", "length", "iterations", mode="before")
    @classmethod
    def blank_means_default(cls, v):
        if isinstance(v, str) and v.strip() == "":
            raise PydanticUseDefault()
        return v

    @field_validator("length", "iterations", mode="before")
    @classmethod
    def strip_numbers(cls, v):
        return v.strip() if isinstance(v, str) else v

    @classmethod
    def from_env(cls) -> "GeneratorSettings":
        try:
            return cls()
        except pydantic.ValidationError as e:
            problems = "; ".join(
                f"{ENV_PREFIX}{str(err['loc'][0]).upper()}: {err['msg']}" for err in e.errors()
            )
            raise ValidationError(f"Invalid settings ({problems}).") from e
