from __future__ import annotations

from pnl_sim.config.env import DriverConfig
from pnl_sim.projection.scenario import ScenarioParams


def growth_factor(revenue_growth: float) -> float:
    return 1.0 + revenue_growth / 100.0


def robotization_savings(robotization_level: float, cfg: DriverConfig) -> float:
    """Fractional labor-cost reduction from automation penetration."""
    return robotization_level / 100.0 * cfg.robotization_efficiency_factor


def learning_curve(revenue_growth: float, cfg: DriverConfig) -> float:
    """Productivity discount from scale: accrues with growth, capped."""
    return min(cfg.learning_curve_cap, revenue_growth / 100.0 * cfg.learning_curve_rate)


def personnel_factor(p: ScenarioParams, cfg: DriverConfig) -> float:
    """Growth-scaled personnel multiplier with automation and learning discounts compounded.

    factor = g * (1 - robotization_savings) * (1 - learning_curve)
    """
    g = growth_factor(p.revenue_growth)
    r = robotization_savings(p.robotization_level, cfg)
    l = learning_curve(p.revenue_growth, cfg)
    return g * (1.0 - r) * (1.0 - l)


def space_needed(p: ScenarioParams, cfg: DriverConfig) -> float:
    """Rent multiplier: volume growth offset inversely by utilization vs. the reference level."""
    if p.warehouse_utilization <= 0:
        raise ValueError("warehouseUtilization must be > 0")
    return growth_factor(p.revenue_growth) * (cfg.reference_utilization / p.warehouse_utilization)


def sga_scale_factor(revenue_growth: float, cfg: DriverConfig) -> float:
    # Fixed overhead grows slower than revenue
    return 1.0 + revenue_growth / 100.0 * cfg.scale_efficiency_factor
