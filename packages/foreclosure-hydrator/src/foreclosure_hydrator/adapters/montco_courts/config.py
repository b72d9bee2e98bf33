"""
Montgomery County Courts Configuration

This module provides configuration utilities for the Montgomery County courts
adapter. The configuration model is defined in foreclosure-types for SSOT
compliance; this module only decides where its values come from.

Precedence, lowest first: model defaults, FORECLOSURE_* environment variables,
a YAML config file, explicit overrides (CLI flags).
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from loguru import logger
from foreclosure_types.schemas import PipelineConfig

from foreclosure_extractors.address import county_towns

ENV_PREFIX = "FORECLOSURE_"


def _env_list(name: str, default: str) -> List[str]:
    return [part.strip() for part in os.getenv(name, default).split(",") if part.strip()]


def _env_optional_int(name: str, default: Optional[int]) -> Optional[int]:
    value = os.getenv(name)
    if value is None:
        return default
    if value.strip().lower() in ("", "none", "0"):
        return None
    return int(value)


def get_default_config() -> PipelineConfig:
    """Get default pipeline configuration with environment variable overrides.

    Returns:
        PipelineConfig: Default configuration from foreclosure-types
    """
    try:
        details_file = os.getenv(f"{ENV_PREFIX}DETAILS_FILE")

        config = PipelineConfig(
            min_days_old=int(os.getenv(f"{ENV_PREFIX}MIN_DAYS_OLD", "45")),
            max_days_old=int(os.getenv(f"{ENV_PREFIX}MAX_DAYS_OLD", "270")),
            max_cases=_env_optional_int(f"{ENV_PREFIX}MAX_CASES", 75),
            default_state=os.getenv(f"{ENV_PREFIX}DEFAULT_STATE", "PA"),
            valid_states=_env_list(f"{ENV_PREFIX}VALID_STATES", "NJ,PA"),
            county_name=os.getenv(f"{ENV_PREFIX}COUNTY", "Montgomery"),
            max_workers=int(os.getenv(f"{ENV_PREFIX}MAX_WORKERS", "1")),
            output_dir=Path(os.getenv(f"{ENV_PREFIX}OUTPUT_DIR", "data")),
            output_file=os.getenv(f"{ENV_PREFIX}OUTPUT_FILE", "pipeline.json"),
            cases_csv=Path(os.getenv(f"{ENV_PREFIX}CASES_CSV", "data/montco-cases.csv")),
            details_file=Path(details_file) if details_file else None,
        )

        # Fail early on a county we have no town list for
        county_towns(config.county_name)

        return config

    except Exception as e:
        logger.error(f"Error loading configuration: {e}")
        raise


def apply_overrides(
    config: PipelineConfig, overrides: Mapping[str, Any], skip_none: bool = True
) -> PipelineConfig:
    """Return a new config with overrides applied (validated together)."""
    updates = {k: v for k, v in overrides.items() if v is not None or not skip_none}
    if not updates:
        return config
    unknown = set(updates) - set(PipelineConfig.model_fields)
    if unknown:
        raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
    return PipelineConfig(**{**config.model_dump(), **updates})


def load_config(
    config_file: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> PipelineConfig:
    """Build the effective configuration for a run.

    Args:
        config_file: Optional YAML file whose keys override the defaults
        overrides: Explicit values (None entries are ignored)

    Returns:
        PipelineConfig
    """
    config = get_default_config()

    if config_file is not None:
        with open(config_file) as f:
            file_values: Dict[str, Any] = yaml.safe_load(f) or {}
        if not isinstance(file_values, dict):
            raise ValueError(f"Config file {config_file} must contain a mapping")
        logger.debug(f"Loaded {len(file_values)} settings from {config_file}")
        config = apply_overrides(config, file_values, skip_none=False)

    if overrides:
        config = apply_overrides(config, overrides)

    return config
