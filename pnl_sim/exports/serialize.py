from __future__ import annotations
from dataclasses import fields
from typing import Any, Dict, Optional

from pnl_sim.baseline.statement import camel
from pnl_sim.projection.result import ProjectedStatement
from pnl_sim.projection.scenario import ScenarioParams, params_to_dict

# Non-monetary fields keep their own precision
_UNROUNDED = {"tax_rate", "valuation_multiple"}


def round1(v: Optional[float]) -> Optional[float]:
    if v is None:
        return None
    r = round(float(v), 1)
    return 0.0 if r == 0 else r  # normalize -0.0


def projection_to_dict(m: ProjectedStatement) -> Dict[str, Optional[float]]:
    """camelCase mapping in declaration order, money rounded to one decimal."""
    out: Dict[str, Optional[float]] = {}
    for f in fields(m):
        v = getattr(m, f.name)
        out[camel(f.name)] = v if f.name in _UNROUNDED else round1(v)
    return out


def scenario_to_dict(p: ScenarioParams, m: ProjectedStatement) -> Dict[str, Any]:
    return {"params": params_to_dict(p), "projection": projection_to_dict(m)}


def fmt1(v: Optional[float], suffix: str = "") -> str:
    if v is None:
        return "n/a"
    return f"{round1(v):.1f}{suffix}"
