from __future__ import annotations
from dataclasses import fields
from typing import Optional
import logging
import math

from pnl_sim.baseline.statement import BaselineStatement, validate_baseline
from pnl_sim.config.env import DriverConfig, get_driver_config, validate_driver_config
from pnl_sim.projection.drivers import (
    growth_factor,
    personnel_factor,
    space_needed,
    sga_scale_factor,
)
from pnl_sim.projection.result import ProjectedStatement
from pnl_sim.projection.scenario import ScenarioParams, validate_params
from pnl_sim.valuation.capex import automation_capex, capex_financing
from pnl_sim.valuation.multiple import enterprise_value, valuation_multiple

logger = logging.getLogger(__name__)


def _check_finite(m: ProjectedStatement) -> None:
    # Huge but finite inputs can overflow to inf, and inf - inf gives NaN
    bad = [f.name for f in fields(m) if getattr(m, f.name) is not None and not math.isfinite(getattr(m, f.name))]
    if bad:
        raise ValueError(f"projection overflowed: {', '.join(bad)} not finite")


def project(
    baseline: BaselineStatement,
    params: ScenarioParams,
    config: Optional[DriverConfig] = None,
) -> ProjectedStatement:
    """Project the target-year P&L from a baseline statement and scenario levers.

    Pure function of its inputs: no caching, no shared state. Raises ValueError
    for contract violations (negative money, out-of-range levers)
    and for inputs so large that a line item overflows.

    Order of derivation:
    - revenue, then COGS (personnel, rent, utilities, materials, fuel)
    - SG&A with the scale effect (marketing tracks revenue)
    - EBITDA and margin (margin is None when revenue is 0)
    - automation capex -> extra depreciation and interest
    - EBIT, pre-tax, tax (no benefit on losses), net income
    - valuation from a tiered EBITDA multiple
    """
    validate_baseline(baseline)
    validate_params(params)
    cfg = config or get_driver_config()
    validate_driver_config(cfg)

    g = growth_factor(params.revenue_growth)
    revenue = baseline.revenue * g

    # COGS
    personnel = baseline.cogs_personnel * personnel_factor(params, cfg)
    rent = baseline.cogs_rent * space_needed(params, cfg)
    utilities = baseline.cogs_utilities * g  # semi-variable, modeled linearly
    materials = baseline.cogs_materials * g
    fuel = baseline.cogs_fuel * g
    total_cogs = personnel + rent + utilities + materials + fuel
    gross_profit = revenue - total_cogs

    # SG&A
    s = sga_scale_factor(params.revenue_growth, cfg)
    management = baseline.sga_management * s
    it = baseline.sga_it * s
    marketing = baseline.sga_marketing * g
    other = baseline.sga_other * s
    total_sga = management + it + marketing + other

    total_opex = total_cogs + total_sga
    ebitda = revenue - total_cogs - total_sga
    ebitda_margin = 100.0 * ebitda / revenue if revenue != 0 else None

    # Below EBITDA
    fin = capex_financing(automation_capex(params.robotization_level, cfg), cfg)
    depreciation = baseline.depreciation + fin.additional_depreciation
    ebit = ebitda - depreciation
    interest = baseline.interest + fin.additional_interest
    pre_tax_profit = ebit - interest
    tax_amount = max(0.0, pre_tax_profit) * baseline.tax_rate / 100.0
    net_income = pre_tax_profit - tax_amount

    multiple = valuation_multiple(params.robotization_level, cfg)

    logger.debug(
        "projected revenue=%.3f ebitda=%.3f capex=%.3f multiple=%.1f",
        revenue, ebitda, fin.capex, multiple,
    )

    result = ProjectedStatement(
        revenue=revenue,
        cogs_personnel=personnel,
        cogs_rent=rent,
        cogs_utilities=utilities,
        cogs_materials=materials,
        cogs_fuel=fuel,
        total_cogs=total_cogs,
        gross_profit=gross_profit,
        sga_management=management,
        sga_it=it,
        sga_marketing=marketing,
        sga_other=other,
        total_sga=total_sga,
        total_opex=total_opex,
        ebitda=ebitda,
        ebitda_margin=ebitda_margin,
        depreciation=depreciation,
        ebit=ebit,
        interest=interest,
        pre_tax_profit=pre_tax_profit,
        tax_rate=baseline.tax_rate,
        tax_amount=tax_amount,
        net_income=net_income,
        capex_requirement=fin.capex,
        additional_debt=fin.debt,
        valuation_multiple=multiple,
        valuation=enterprise_value(ebitda, multiple),
    )
    _check_finite(result)
    return result
