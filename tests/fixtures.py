from pnl_sim.baseline.statement import BaselineStatement
from pnl_sim.projection.scenario import ScenarioParams

# 2026 plan: revenue 550, COGS 300, SG&A 156 -> EBITDA 94 (~17.1% margin)
BASELINE_PAYLOAD = {
    "revenue": 550,
    "cogsPersonnel": 180,
    "cogsRent": 60,
    "cogsUtilities": 15,
    "cogsMaterials": 25,
    "cogsFuel": 20,
    "sgaManagement": 70,
    "sgaIt": 25,
    "sgaMarketing": 20,
    "sgaOther": 41,
    "depreciation": 30,
    "interest": 12,
    "taxRate": 20,
}

PARAMS_PAYLOAD = {
    "revenueGrowth": 100,
    "robotizationLevel": 30,
    "warehouseUtilization": 90,
    "vasShare": 5,
}


def baseline(**overrides) -> BaselineStatement:
    values = {
        "revenue": 550.0,
        "cogs_personnel": 180.0,
        "cogs_rent": 60.0,
        "cogs_utilities": 15.0,
        "cogs_materials": 25.0,
        "cogs_fuel": 20.0,
        "sga_management": 70.0,
        "sga_it": 25.0,
        "sga_marketing": 20.0,
        "sga_other": 41.0,
        "depreciation": 30.0,
        "interest": 12.0,
        "tax_rate": 20.0,
    }
    values.update(overrides)
    return BaselineStatement(**values)


def params(**overrides) -> ScenarioParams:
    values = {
        "revenue_growth": 0.0,
        "robotization_level": 0.0,
        "warehouse_utilization": 82.0,
        "vas_share": 5.0,
    }
    values.update(overrides)
    return ScenarioParams(**values)
