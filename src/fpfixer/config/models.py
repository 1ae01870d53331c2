"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, fpfixer.toml only contains
overrides. A project with no config file still works from CLI flags.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from fpfixer.domain.limits import DEFAULT_MAX_RECURSION, MAX_RECURSION_CEILING

# --- fpfixer.toml sections ---


class FixerConfig(BaseModel):
    """[fixer] section."""

    model_config = {"frozen": True}

    max_recursion: int = Field(default=DEFAULT_MAX_RECURSION, ge=0, le=MAX_RECURSION_CEILING)
    rounding: Literal["decimal", "ceil"] = "decimal"


class RegistryConfig(BaseModel):
    """[registry] section. Paths are relative to the config file."""

    model_config = {"frozen": True}

    paths: list[str] = Field(default_factory=list)

