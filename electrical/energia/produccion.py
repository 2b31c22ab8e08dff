# electrical/energia/produccion.py
# Estimación de producción anual: estrategia autoritativa (servicio externo)
# y modo offline explícito (horas sol promedio).
from __future__ import annotations

from typing import TYPE_CHECKING, List, Mapping, Optional

from .contrato import ProductionEstimate, ProductionRequest
from .perdidas import performance_ratio, total_losses

if TYPE_CHECKING:
    from core.puertos import ProductionService

DEFAULT_SUN_HOURS = 4.5
_DIAS_MES = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


def build_production_request(
    system_size_kw: float,
    latitude: float,
    longitude: float,
    tilt: float,
    azimuth: float,
    losses: Optional[Mapping[str, float]] = None,
) -> ProductionRequest:
    return ProductionRequest(
        system_capacity_kw=float(system_size_kw),
        latitude=float(latitude),
        longitude=float(longitude),
        azimuth_deg=float(azimuth),
        tilt_deg=float(tilt),
        total_loss_pct=total_losses(losses),
    )


def estimate_production(
    service: ProductionService,
    system_size_kw: float,
    latitude: float,
    longitude: float,
    tilt: float,
    azimuth: float,
    losses: Optional[Mapping[str, float]] = None,
) -> ProductionEstimate:
    """
    Arma el request, consulta el servicio e interpreta la respuesta.
    Un fallo del servicio (ProductionServiceError) se propaga tal cual.
    """
    request = build_production_request(system_size_kw, latitude, longitude, tilt, azimuth, losses)
    response = service.calculate_production(request)

    return ProductionEstimate(
        annual_kwh=float(response.annual_kwh),
        monthly_kwh=list(response.monthly_kwh),
        hourly_kwh=list(response.hourly_kwh),
        losses_pct=request.total_loss_pct,
        performance_ratio=performance_ratio(response.annual_kwh, system_size_kw),
        source="service",
        meta={"request": request},
    )


def flat_production_estimate(
    system_size_kw: float,
    average_sun_hours: float = DEFAULT_SUN_HOURS,
) -> ProductionEstimate:
    """Modo offline: tamaño × horas sol × 365, repartido por días del mes."""
    annual = float(system_size_kw) * float(average_sun_hours) * 365.0
    monthly: List[float] = [annual * d / 365.0 for d in _DIAS_MES]
    return ProductionEstimate(
        annual_kwh=annual,
        monthly_kwh=monthly,
        hourly_kwh=[],
        losses_pct=0.0,
        performance_ratio=performance_ratio(annual, system_size_kw),
        source="flat",
        meta={"average_sun_hours": float(average_sun_hours)},
    )
