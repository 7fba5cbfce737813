from __future__ import annotations
from typing import Any, Dict, List, Optional

from pnl_sim.baseline.statement import BaselineStatement, baseline_totals
from pnl_sim.config.env import TargetsConfig
from pnl_sim.projection.result import ProjectedStatement


def _delta(a: Optional[float], b: Optional[float]) -> Optional[float]:
    if a is None or b is None:
        return None
    return float(b) - float(a)


def ebitda_bridge(m: ProjectedStatement) -> List[Dict[str, Any]]:
    """Revenue-to-EBITDA walk. Expense steps carry negative values."""
    other_cogs = m.cogs_materials + m.cogs_fuel + m.cogs_utilities
    return [
        {"name": "Revenue", "value": m.revenue, "type": "total"},
        {"name": "Personnel", "value": -m.cogs_personnel, "type": "expense"},
        {"name": "Rent", "value": -m.cogs_rent, "type": "expense"},
        {"name": "Other COGS", "value": -other_cogs, "type": "expense"},
        {"name": "Gross profit", "value": m.gross_profit, "type": "subtotal"},
        {"name": "SG&A", "value": -m.total_sga, "type": "expense"},
        {"name": "EBITDA", "value": m.ebitda, "type": "net"},
    ]


def compare_to_baseline(b: BaselineStatement, m: ProjectedStatement) -> List[Dict[str, Any]]:
    base = baseline_totals(b)
    rows = []
    for key, label in (("revenue", "Revenue"), ("ebitda", "EBITDA"), ("ebitda_margin", "EBITDA margin")):
        scenario = getattr(m, key)
        rows.append({
            "metric": label,
            "baseline": base[key],
            "scenario": scenario,
            "delta": _delta(base[key], scenario),
        })
    return rows


def covenant_checks(m: ProjectedStatement, targets: TargetsConfig) -> Dict[str, bool]:
    margin = m.ebitda_margin
    if m.additional_debt <= 0:
        leverage_ok = True
    elif m.ebitda <= 0:
        leverage_ok = False
    else:
        leverage_ok = m.additional_debt / m.ebitda < targets.max_debt_to_ebitda
    return {
        "ebitda_margin_meets_target": margin is not None and margin >= targets.target_ebitda_margin,
        "ebitda_margin_above_covenant": margin is not None and margin >= targets.min_ebitda_margin,
        "incremental_debt_to_ebitda_ok": leverage_ok,
    }
