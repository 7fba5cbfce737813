from __future__ import annotations
from dataclasses import asdict
from typing import Dict, Any, List
import math

from pnl_sim.config.env import DriverConfig
from pnl_sim.projection.result import ProjectedStatement
from pnl_sim.projection.scenario import ScenarioParams, params_to_dict

VAS_SHARE_WARNING = "vasShare is recorded but not yet used by any cost or margin formula"


def _close(a: float, b: float, rel: float = 1e-9) -> bool:
    return math.isclose(a, b, rel_tol=rel, abs_tol=1e-9)


def check_identities(m: ProjectedStatement) -> Dict[str, bool]:
    """Roll-up identities of the projected statement."""
    cogs = m.cogs_personnel + m.cogs_rent + m.cogs_utilities + m.cogs_materials + m.cogs_fuel
    sga = m.sga_management + m.sga_it + m.sga_marketing + m.sga_other
    checks = {
        "total_cogs": _close(m.total_cogs, cogs),
        "gross_profit": _close(m.gross_profit, m.revenue - m.total_cogs),
        "total_sga": _close(m.total_sga, sga),
        "ebitda": _close(m.ebitda, m.revenue - m.total_cogs - m.total_sga),
        "ebit": _close(m.ebit, m.ebitda - m.depreciation),
        "pre_tax_profit": _close(m.pre_tax_profit, m.ebit - m.interest),
        "tax_floor": _close(m.tax_amount, max(0.0, m.pre_tax_profit) * m.tax_rate / 100.0),
        "net_income": _close(m.net_income, m.pre_tax_profit - m.tax_amount),
    }
    if m.ebitda_margin is not None:
        checks["ebitda_margin"] = _close(m.ebitda_margin, 100.0 * m.ebitda / m.revenue)
    return checks


def assumptions_md(
    params: ScenarioParams, cfg: DriverConfig, warnings: List[str] | None = None
) -> str:
    lines = ["# Assumptions", "", "## Scenario levers"]
    for k, v in params_to_dict(params).items():
        lines.append(f"- {k}: {v}")
    lines.append("\n## Driver constants")
    for k, v in asdict(cfg).items():
        lines.append(f"- {k}: {v}")
    if warnings:
        lines.append("\n## Warnings")
        for w in warnings:
            lines.append(f"- {w}")
    return "\n".join(lines) + "\n"


def validation_report_md(checks: Dict[str, bool], details: Dict[str, Any] | None = None) -> str:
    lines = ["# Validation Report", ""]
    for k, ok in checks.items():
        lines.append(f"- {k}: {'PASS' if ok else 'FAIL'}")
    if details:
        lines.append("\n## Details")
        for k, v in details.items():
            lines.append(f"- {k}: {v}")
    return "\n".join(lines) + "\n"
