from __future__ import annotations

from typing import Any, Dict, List, Optional

from .modelo import DesignMetrics, SavingsResult, YearlyProjection

__all__ = [
    "as_float",
    "as_int",
    "get_technical",
    "get_layout",
    "get_panel_count",
    "get_system_size_kw",
    "get_total_cost",
    "get_annual_production",
    "get_savings",
    "get_yearly",
    "get_payback_period",
    "get_string_validation",
    "get_metrics",
]


# ==========================================================
# Helpers base
# ==========================================================
def _as_dict(x: Any) -> Dict[str, Any]:
    return dict(x) if isinstance(x, dict) else {}


def as_float(x: Any, default: float = 0.0) -> float:
    try:
        if x is None:
            return float(default)
        return float(x)
    except (TypeError, ValueError):
        return float(default)


def as_int(x: Any, default: int = 0) -> int:
    try:
        if x is None:
            return int(default)
        return int(float(x))
    except (TypeError, ValueError):
        return int(default)


# ==========================================================
# Accessors
# ==========================================================
def get_technical(res: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return _as_dict(_as_dict(res).get("tecnico"))


def get_layout(res: Optional[Dict[str, Any]]) -> Any:
    return get_technical(res).get("layout")


def get_metrics(res: Optional[Dict[str, Any]]) -> Optional[DesignMetrics]:
    m = _as_dict(res).get("metrics")
    return m if isinstance(m, DesignMetrics) else None


def get_panel_count(res: Optional[Dict[str, Any]]) -> int:
    m = get_metrics(res)
    if m is not None:
        return int(m.panel_count)
    layout = get_layout(res)
    return as_int(getattr(layout, "total_panels", 0))


def get_system_size_kw(res: Optional[Dict[str, Any]]) -> float:
    m = get_metrics(res)
    return as_float(m.system_size_kw if m is not None else 0.0)


def get_total_cost(res: Optional[Dict[str, Any]]) -> float:
    return as_float(_as_dict(_as_dict(res).get("costos")).get("total"))


def get_annual_production(res: Optional[Dict[str, Any]]) -> float:
    prod = _as_dict(res).get("produccion")
    return as_float(getattr(prod, "annual_kwh", 0.0))


def get_savings(res: Optional[Dict[str, Any]]) -> Optional[SavingsResult]:
    s = _as_dict(_as_dict(res).get("financiero")).get("savings")
    return s if isinstance(s, SavingsResult) else None


def get_yearly(res: Optional[Dict[str, Any]]) -> List[YearlyProjection]:
    s = get_savings(res)
    return list(s.yearly) if s is not None else []


def get_payback_period(res: Optional[Dict[str, Any]]) -> int:
    s = get_savings(res)
    return int(s.payback_period) if s is not None else 0


def get_string_validation(res: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    strings = _as_dict(get_technical(res).get("strings"))
    return _as_dict(strings.get("validacion"))
