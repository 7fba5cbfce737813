from __future__ import annotations
import math
import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass(frozen=True)
class DriverConfig:
    # Max fractional labor-cost reduction at 100% automation
    robotization_efficiency_factor: float = 0.4
    # Share of revenue growth passed on to fixed overhead
    scale_efficiency_factor: float = 0.6
    learning_curve_rate: float = 0.05
    learning_curve_cap: float = 0.10
    reference_utilization: float = 82.0  # percent

    # Automation capex
    capex_per_robot_percent: float = 1.5  # currency units per pp above the floor
    automation_floor: float = 5.0  # percent
    asset_life_years: float = 5.0
    debt_financed_share: float = 0.5
    debt_interest_rate: float = 0.16

    # (threshold, multiple) pairs, highest threshold first; level must be strictly above
    valuation_tiers: Tuple[Tuple[float, float], ...] = ((50.0, 10.0), (20.0, 8.0))
    base_multiple: float = 6.0


def validate_driver_config(c: DriverConfig) -> None:
    for name in ("robotization_efficiency_factor", "scale_efficiency_factor",
                 "learning_curve_cap", "debt_financed_share"):
        v = getattr(c, name)
        if not (0.0 <= v <= 1.0):
            raise ValueError(f"{name} must be between 0 and 1, got {v}")
    for name in ("learning_curve_rate", "capex_per_robot_percent", "automation_floor",
                 "debt_interest_rate", "base_multiple"):
        v = getattr(c, name)
        if not (math.isfinite(v) and v >= 0.0):
            raise ValueError(f"{name} must be >= 0, got {v}")
    if not (c.reference_utilization > 0 and math.isfinite(c.reference_utilization)):
        raise ValueError("reference_utilization must be > 0")
    if not (c.asset_life_years > 0 and math.isfinite(c.asset_life_years)):
        raise ValueError("asset_life_years must be > 0")


def get_driver_config() -> DriverConfig:
    d = DriverConfig()
    cfg = DriverConfig(
        robotization_efficiency_factor=_env_float("ROBOTIZATION_EFFICIENCY_FACTOR", d.robotization_efficiency_factor),
        scale_efficiency_factor=_env_float("SCALE_EFFICIENCY_FACTOR", d.scale_efficiency_factor),
        learning_curve_rate=_env_float("LEARNING_CURVE_RATE", d.learning_curve_rate),
        learning_curve_cap=_env_float("LEARNING_CURVE_CAP", d.learning_curve_cap),
        reference_utilization=_env_float("REFERENCE_UTILIZATION", d.reference_utilization),
        capex_per_robot_percent=_env_float("CAPEX_PER_ROBOT_PERCENT", d.capex_per_robot_percent),
        automation_floor=_env_float("AUTOMATION_FLOOR", d.automation_floor),
        asset_life_years=_env_float("ASSET_LIFE_YEARS", d.asset_life_years),
        debt_financed_share=_env_float("DEBT_FINANCED_SHARE", d.debt_financed_share),
        debt_interest_rate=_env_float("DEBT_INTEREST_RATE", d.debt_interest_rate),
    )
    validate_driver_config(cfg)
    return cfg


@dataclass(frozen=True)
class TargetsConfig:
    target_ebitda_margin: float = 25.0  # percent
    min_ebitda_margin: float = 18.0  # covenant, percent
    max_debt_to_ebitda: float = 3.0


def get_targets_config() -> TargetsConfig:
    d = TargetsConfig()
    return TargetsConfig(
        target_ebitda_margin=_env_float("TARGET_EBITDA_MARGIN", d.target_ebitda_margin),
        min_ebitda_margin=_env_float("MIN_EBITDA_MARGIN", d.min_ebitda_margin),
        max_debt_to_ebitda=_env_float("MAX_DEBT_TO_EBITDA", d.max_debt_to_ebitda),
    )


@dataclass(frozen=True)
class AdvisoryConfig:
    api_key: str | None = None
    model: str = "gemini-2.5-flash"
    temperature: float = 0.5
    max_output_tokens: int = 500


def get_advisory_config() -> AdvisoryConfig:
    d = AdvisoryConfig()
    return AdvisoryConfig(
        api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY"),
        model=os.getenv("GEMINI_MODEL", d.model),
        temperature=_env_float("ADVISORY_TEMPERATURE", d.temperature),
        max_output_tokens=int(_env_float("ADVISORY_MAX_TOKENS", d.max_output_tokens)),
    )
