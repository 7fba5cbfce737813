from __future__ import annotations
from dataclasses import dataclass

from pnl_sim.config.env import DriverConfig


@dataclass(frozen=True)
class CapexFinancing:
    capex: float                    # accumulated automation capex
    additional_depreciation: float  # straight-line over the asset life
    debt: float                     # debt-financed share of capex
    additional_interest: float


def automation_capex(robotization_level: float, cfg: DriverConfig) -> float:
    """Accumulated capex for automation above the baseline floor (0 at or below it)."""
    if robotization_level > cfg.automation_floor:
        return (robotization_level - cfg.automation_floor) * cfg.capex_per_robot_percent
    return 0.0


def capex_financing(capex: float, cfg: DriverConfig) -> CapexFinancing:
    if cfg.asset_life_years <= 0:
        raise ValueError("asset life must be > 0")
    debt = capex * cfg.debt_financed_share
    return CapexFinancing(
        capex=capex,
        additional_depreciation=capex / cfg.asset_life_years,
        debt=debt,
        additional_interest=debt * cfg.debt_interest_rate,
    )
