from __future__ import annotations

from pnl_sim.config.env import DriverConfig


def valuation_multiple(robotization_level: float, cfg: DriverConfig) -> float:
    """EBITDA multiple tiered by automation maturity.
    Thresholds are exclusive: the level must be strictly above a tier to earn it.
    """
    for threshold, multiple in sorted(cfg.valuation_tiers, reverse=True):
        if robotization_level > threshold:
            return float(multiple)
    return float(cfg.base_multiple)


def enterprise_value(ebitda: float, multiple: float) -> float:
    return float(ebitda * multiple)
