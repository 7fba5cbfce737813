from __future__ import annotations
from typing import List, Dict, Any, Iterable
import csv
import io

from pnl_sim.baseline.statement import BaselineStatement
from pnl_sim.exports.serialize import round1
from pnl_sim.projection.bridge import ebitda_bridge
from pnl_sim.projection.result import ProjectedStatement

SCHEMAS = {
    "projection": ["line_item", "baseline", "scenario"],
    "bridge": ["name", "value", "type"],
}

# (line item, attribute); aggregates have no baseline counterpart
PL_LINES = [
    ("Revenue", "revenue"),
    ("Personnel", "cogs_personnel"),
    ("Rent", "cogs_rent"),
    ("Utilities", "cogs_utilities"),
    ("Materials", "cogs_materials"),
    ("Fuel", "cogs_fuel"),
    ("Total COGS", "total_cogs"),
    ("Gross profit", "gross_profit"),
    ("Management", "sga_management"),
    ("IT", "sga_it"),
    ("Marketing", "sga_marketing"),
    ("Other SG&A", "sga_other"),
    ("Total SG&A", "total_sga"),
    ("Total opex", "total_opex"),
    ("EBITDA", "ebitda"),
    ("EBITDA margin %", "ebitda_margin"),
    ("Depreciation", "depreciation"),
    ("EBIT", "ebit"),
    ("Interest", "interest"),
    ("Pre-tax profit", "pre_tax_profit"),
    ("Tax rate %", "tax_rate"),
    ("Tax", "tax_amount"),
    ("Net income", "net_income"),
    ("Capex requirement", "capex_requirement"),
    ("Additional debt", "additional_debt"),
    ("Valuation multiple", "valuation_multiple"),
    ("Valuation", "valuation"),
]


def write_csv(rows: Iterable[Dict[str, Any]], columns: List[str]) -> str:
    buf = io.StringIO()
    w = csv.DictWriter(buf, fieldnames=columns, extrasaction="ignore")
    w.writeheader()
    for r in rows:
        w.writerow({k: r.get(k) for k in columns})
    return buf.getvalue()


def write_projection_csv(b: BaselineStatement, m: ProjectedStatement) -> str:
    rows = []
    for label, attr in PL_LINES:
        base = getattr(b, attr, None)
        scen = getattr(m, attr)
        rows.append({
            "line_item": label,
            "baseline": "" if base is None else round1(base),
            "scenario": "n/a" if scen is None else round1(scen),
        })
    return write_csv(rows, SCHEMAS["projection"])


def write_bridge_csv(m: ProjectedStatement) -> str:
    rows = [{**step, "value": round1(step["value"])} for step in ebitda_bridge(m)]
    return write_csv(rows, SCHEMAS["bridge"])
