from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping
import math

from pnl_sim.baseline.statement import camel, read_fields


@dataclass(frozen=True)
class ScenarioParams:
    # All levers are percentages expressed as 0..100 numbers
    revenue_growth: float  # target-year growth over baseline, >= 0
    robotization_level: float  # 0..100
    warehouse_utilization: float  # 50..100
    vas_share: float = 0.0  # 0..25; carried through, not used by any formula yet


def validate_params(p: ScenarioParams) -> None:
    for f in fields(p):
        if not math.isfinite(getattr(p, f.name)):
            raise ValueError(f"{camel(f.name)} must be a finite number")
    if p.revenue_growth < 0:
        raise ValueError("revenueGrowth must be >= 0")
    if not (0.0 <= p.robotization_level <= 100.0):
        raise ValueError("robotizationLevel must be between 0 and 100")
    if not (50.0 <= p.warehouse_utilization <= 100.0):
        raise ValueError("warehouseUtilization must be between 50 and 100")
    if not (0.0 <= p.vas_share <= 25.0):
        raise ValueError("vasShare must be between 0 and 25")


def params_from_dict(d: Mapping[str, Any]) -> ScenarioParams:
    p = ScenarioParams(**read_fields(ScenarioParams, d, defaults={"vas_share": 0.0}))
    validate_params(p)
    return p


def params_to_dict(p: ScenarioParams) -> Dict[str, float]:
    return {camel(f.name): getattr(p, f.name) for f in fields(p)}
