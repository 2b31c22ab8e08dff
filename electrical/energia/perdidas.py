# electrical/energia/perdidas.py

from __future__ import annotations

from typing import Dict, Mapping, Optional

# % por categoría; la suma (14.08) es la pérdida total enviada a PVWatts.
DEFAULT_LOSSES: Dict[str, float] = {
    "soiling": 2.0,
    "shading": 3.0,
    "mismatch": 2.0,
    "wiring": 2.0,
    "connections": 0.5,
    "degradation": 1.5,
    "nameplate": 1.0,
    "age": 1.0,
    "availability": 1.08,
}


def merge_losses(overrides: Optional[Mapping[str, float]] = None) -> Dict[str, float]:
    out = dict(DEFAULT_LOSSES)
    for k, v in (overrides or {}).items():
        if k not in out:
            raise ValueError(f"Categoría de pérdida desconocida: {k!r}")
        try:
            val = float(v)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Pérdida '{k}' debe ser numérica. Valor={v!r}") from e
        if val < 0:
            raise ValueError(f"Pérdida '{k}' no puede ser negativa ({val}).")
        out[k] = val
    return out


def total_losses(overrides: Optional[Mapping[str, float]] = None) -> float:
    """Pérdida total en % (suma simple de categorías)."""
    return float(sum(merge_losses(overrides).values()))


def performance_ratio(annual_kwh: float, system_size_kw: float) -> float:
    """Energía anual / (capacidad nominal × 8760 h)."""
    if system_size_kw <= 0:
        return 0.0
    return float(annual_kwh) / (float(system_size_kw) * 8760.0)
