from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional
import math


@dataclass(frozen=True)
class BaselineStatement:
    """Prior-period P&L actuals. Monetary fields share one unit (e.g. millions)."""
    revenue: float

    # COGS
    cogs_personnel: float
    cogs_rent: float
    cogs_utilities: float
    cogs_materials: float
    cogs_fuel: float

    # SG&A
    sga_management: float
    sga_it: float
    sga_marketing: float
    sga_other: float

    # Below EBITDA
    depreciation: float
    interest: float
    tax_rate: float  # percent, 0..100


def camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(p.capitalize() for p in rest)


def read_fields(
    cls: type, d: Mapping[str, Any], defaults: Optional[Dict[str, float]] = None
) -> Dict[str, float]:
    """Pull dataclass fields from a payload keyed by camelCase or snake_case names."""
    if not isinstance(d, Mapping):
        raise ValueError(f"{cls.__name__} payload must be an object")
    defaults = defaults or {}
    out: Dict[str, float] = {}
    for f in fields(cls):
        key = camel(f.name)
        if key in d:
            raw = d[key]
        elif f.name in d:
            raw = d[f.name]
        elif f.name in defaults:
            raw = defaults[f.name]
        else:
            raise ValueError(f"missing field '{key}'")
        if isinstance(raw, bool) or raw is None:
            raise ValueError(f"field '{key}' must be a number")
        try:
            out[f.name] = float(raw)
        except (TypeError, ValueError, OverflowError):
            raise ValueError(f"field '{key}' must be a number, got {raw!r}")
    return out


def validate_baseline(b: BaselineStatement) -> None:
    for f in fields(b):
        v = getattr(b, f.name)
        if not math.isfinite(v):
            raise ValueError(f"{camel(f.name)} must be a finite number")
        if v < 0:
            raise ValueError(f"{camel(f.name)} must be >= 0, got {v}")
    if b.tax_rate > 100:
        raise ValueError(f"taxRate must be between 0 and 100, got {b.tax_rate}")


def baseline_from_dict(d: Mapping[str, Any]) -> BaselineStatement:
    b = BaselineStatement(**read_fields(BaselineStatement, d))
    validate_baseline(b)
    return b


def baseline_to_dict(b: BaselineStatement) -> Dict[str, float]:
    return {camel(f.name): getattr(b, f.name) for f in fields(b)}


def baseline_totals(b: BaselineStatement) -> Dict[str, Optional[float]]:
    """Aggregates of the unprojected statement (the plan column)."""
    total_cogs = b.cogs_personnel + b.cogs_rent + b.cogs_utilities + b.cogs_materials + b.cogs_fuel
    total_sga = b.sga_management + b.sga_it + b.sga_marketing + b.sga_other
    ebitda = b.revenue - total_cogs - total_sga
    return {
        "revenue": b.revenue,
        "total_cogs": total_cogs,
        "total_sga": total_sga,
        "ebitda": ebitda,
        "ebitda_margin": 100.0 * ebitda / b.revenue if b.revenue else None,
    }


def baseline_ebitda(b: BaselineStatement) -> float:
    return float(baseline_totals(b)["ebitda"])
