"""Global configuration: fixed constants and the pipeline settings loader."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from pathwright.errors import ConfigError

logger = logging.getLogger(__name__)

# Classification confidence below which the pipeline records a warning
LOW_CONFIDENCE_THRESHOLD = 0.6

# Upper bound on candidates produced per request
DEFAULT_MAX_SOLUTIONS = 5

# Material variants tried after the primary and alternate candidates
MATERIAL_VARIANTS = ("carbon-steel", "stainless-steel", "aluminum")

# Fallback material for unknown lookups
DEFAULT_MATERIAL = "carbon-steel"

# Shop labor: $/hour and hours per complexity point
LABOR_RATE_PER_HOUR = 50.0
LABOR_HOURS_PER_COMPLEXITY = 0.5

OBJECTIVE_NAMES = (
    "minimize_cost",
    "minimize_weight",
    "maximize_material_efficiency",
    "minimize_complexity",
    "minimize_assembly_time",
    "maximize_maintainability",
)

# Environment variables read by load_config()
_ENV_PREFIX = "PATHWRIGHT_"
_ENV_KEYS: dict[str, str] = {
    "PATHWRIGHT_MAX_SOLUTIONS": "max_solutions",
    "PATHWRIGHT_LOW_CONFIDENCE": "low_confidence_threshold",
    "PATHWRIGHT_VERBOSE": "verbose",
}


class PipelineConfig(BaseModel):
    """Settings for one orchestrator instance."""

    max_solutions: int = Field(default=DEFAULT_MAX_SOLUTIONS, ge=1)
    objectives: dict[str, float] = Field(default_factory=dict)
    """Partial objective weights, merged over the defaults."""

    low_confidence_threshold: float = Field(default=LOW_CONFIDENCE_THRESHOLD, ge=0.0, le=1.0)
    verbose: bool = False


def load_config(
    path: str | Path | None = None,
    environ: dict[str, str] | None = None,
) -> PipelineConfig:
    """Load merged config: defaults -> JSON file -> environment variables.

    Parameters
    ----------
    path:
        Optional JSON file with any subset of :class:`PipelineConfig` fields.
    environ:
        Mapping to read overrides from.  Defaults to ``os.environ``.

    Raises
    ------
    ConfigError
        If the file cannot be read or the merged values are invalid.
    """
    environ = dict(os.environ) if environ is None else environ
    data: dict[str, Any] = {}

    if path is not None:
        config_path = Path(path)
        try:
            raw = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {config_path} must contain a JSON object")
        data.update(raw)

    for env_key, field_name in _ENV_KEYS.items():
        value = environ.get(env_key)
        if value is not None:
            data[field_name] = value

    objectives = dict(data.get("objectives") or {})
    for name in OBJECTIVE_NAMES:
        value = environ.get(f"{_ENV_PREFIX}OBJECTIVE_{name.upper()}")
        if value is not None:
            objectives[name] = value
    if objectives:
        data["objectives"] = objectives

    try:
        config = PipelineConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid pipeline configuration: {exc}") from exc

    unknown = set(config.objectives) - set(OBJECTIVE_NAMES)
    if unknown:
        raise ConfigError(f"Unknown objective weights: {sorted(unknown)}")

    logger.debug("Loaded pipeline config: %s", config.model_dump())
    return config
