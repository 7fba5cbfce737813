from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ProjectedStatement:
    """Target-year P&L produced by one engine call. Never mutated."""
    revenue: float

    cogs_personnel: float
    cogs_rent: float
    cogs_utilities: float
    cogs_materials: float
    cogs_fuel: float
    total_cogs: float
    gross_profit: float

    sga_management: float
    sga_it: float
    sga_marketing: float
    sga_other: float
    total_sga: float
    total_opex: float

    ebitda: float
    ebitda_margin: Optional[float]  # percent; None when revenue is 0

    depreciation: float
    ebit: float
    interest: float
    pre_tax_profit: float
    tax_rate: float
    tax_amount: float
    net_income: float

    capex_requirement: float
    additional_debt: float
    valuation_multiple: float
    valuation: float
