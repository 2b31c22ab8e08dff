# electrical/energia/contrato.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

ARRAY_TYPE_FIXED_ROOF = 1
MODULE_TYPE_STANDARD = 1


@dataclass(frozen=True)
class ProductionRequest:
    """
    Entrada formal del servicio de producción (PVWatts o equivalente).
    Solo física del sitio y del arreglo.
    """

    system_capacity_kw: float
    latitude: float
    longitude: float
    azimuth_deg: float
    tilt_deg: float
    total_loss_pct: float
    array_type: int = ARRAY_TYPE_FIXED_ROOF
    module_type: int = MODULE_TYPE_STANDARD


@dataclass(frozen=True)
class ProductionResponse:
    annual_kwh: float
    monthly_kwh: List[float]
    hourly_kwh: List[float] = field(default_factory=list)


@dataclass(frozen=True)
class ProductionEstimate:
    """
    Resultado interpretado para el diseño.
    source: "service" (servicio externo) o "flat" (modo offline explícito).
    """

    annual_kwh: float
    monthly_kwh: List[float]
    hourly_kwh: List[float]
    losses_pct: float
    performance_ratio: float
    source: str
    meta: Dict[str, Any] = field(default_factory=dict)
