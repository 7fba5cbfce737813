from __future__ import annotations
from typing import Optional

from pnl_sim.config.env import TargetsConfig, get_targets_config
from pnl_sim.exports.serialize import fmt1
from pnl_sim.projection.result import ProjectedStatement
from pnl_sim.projection.scenario import ScenarioParams


def preamble(targets: TargetsConfig) -> str:
    return (
        "You are the virtual CFO of a third-party logistics operator (3PL, dangerous goods).\n"
        f"Goal: EBITDA margin of {fmt1(targets.target_ebitda_margin, '%')}.\n"
        "Rules:\n"
        f"- Minimum EBITDA margin covenant: {fmt1(targets.min_ebitda_margin, '%')}.\n"
        f"- Debt/EBITDA must stay below {fmt1(targets.max_debt_to_ebitda, 'x')}.\n"
        "- Robots cut payroll but raise CAPEX.\n"
        "- SG&A should lag revenue growth (scale effect).\n"
    )


def build_prompt(
    params: ScenarioParams,
    m: ProjectedStatement,
    targets: Optional[TargetsConfig] = None,
) -> str:
    """Advisory prompt for the current scenario.

    Every figure goes through the one-decimal formatter, so identical inputs
    produce identical prompts.
    """
    targets = targets or get_targets_config()
    lines = [
        preamble(targets),
        "CURRENT SCENARIO:",
        "-" * 50,
        "1. KEY METRICS:",
        f"- Revenue: {fmt1(m.revenue)} m (growth {fmt1(params.revenue_growth, '%')})",
        f"- EBITDA: {fmt1(m.ebitda)} m",
        f"- EBITDA margin: {fmt1(m.ebitda_margin, '%')}",
        f"- Net income: {fmt1(m.net_income)} m",
        f"- Valuation: {fmt1(m.valuation)} m ({fmt1(m.valuation_multiple, 'x')} EBITDA)",
        "",
        "2. DRIVERS:",
        f"- Warehouse utilization: {fmt1(params.warehouse_utilization, '%')}",
        f"- Robotization level: {fmt1(params.robotization_level, '%')}",
        f"- VAS share: {fmt1(params.vas_share, '%')}",
        "",
        "3. COST STRUCTURE:",
        f"- COGS: {fmt1(m.total_cogs)} m",
        f"  * Personnel: {fmt1(m.cogs_personnel)} m",
        f"  * Rent: {fmt1(m.cogs_rent)} m",
        f"  * Utilities: {fmt1(m.cogs_utilities)} m",
        f"  * Materials: {fmt1(m.cogs_materials)} m",
        f"  * Fuel: {fmt1(m.cogs_fuel)} m",
        f"- Gross profit: {fmt1(m.gross_profit)} m",
        f"- SG&A: {fmt1(m.total_sga)} m",
        f"  * Management: {fmt1(m.sga_management)} m",
        f"  * IT and WMS: {fmt1(m.sga_it)} m",
        f"  * Marketing: {fmt1(m.sga_marketing)} m",
        f"  * Other: {fmt1(m.sga_other)} m",
        f"- Total opex (COGS + SG&A): {fmt1(m.total_opex)} m",
        "",
        "4. BELOW EBITDA:",
        f"- Depreciation: {fmt1(m.depreciation)} m",
        f"- EBIT: {fmt1(m.ebit)} m",
        f"- Interest: {fmt1(m.interest)} m",
        f"- Pre-tax profit: {fmt1(m.pre_tax_profit)} m",
        f"- Tax rate: {fmt1(m.tax_rate, '%')}",
        f"- Taxes: {fmt1(m.tax_amount)} m",
        f"- Automation CAPEX: {fmt1(m.capex_requirement)} m (debt-financed {fmt1(m.additional_debt)} m)",
        "-" * 50,
        "",
        "TASK:",
        "Give a quick analysis (Markdown, up to 150 words):",
        "1. **Status**: one line (Success/Risk/Disaster).",
        "2. **Drivers**: what pulls results up or down? (payroll vs robots, rent vs utilization).",
        "3. **Advice**: the single most important action right now.",
        "",
        "Be blunt and specific, like a real CFO.",
    ]
    return "\n".join(lines) + "\n"
