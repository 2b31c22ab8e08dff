# core/orquestador.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from electrical.catalogos.modelos import Equipment
from electrical.energia.contrato import ProductionEstimate
from electrical.energia.produccion import estimate_production, flat_production_estimate
from electrical.paneles.orquestador_paneles import strings_from_layout
from geometria.geodesia import centroid, validate_footprint
from geometria.layout import calculate_optimal_layout, estimate_max_panels, infer_roof_azimuth
from geometria.sombras import calculate_shading

from .configuracion import (
    DesignConfig,
    cost_parameters_from,
    financial_assumptions_from,
    layout_config_from,
    load_configuration,
)
from .costos import cost_per_watt_estimate, installed_cost, system_size_kw
from .errores import GeometryError, InvalidFinancialInputError
from .finanzas_lp import benefits_summary, investment_indicators, simulate_savings
from .modelo import DesignMetrics, Footprint
from .puertos import ProductionService

logger = logging.getLogger(__name__)

PRODUCTION_MODES = ("service", "flat")


# ==========================================================
# Helpers de salida
# ==========================================================
def _salida_error(errores: List[Dict[str, str]], **extra: Any) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "ok": False,
        "errores": errores,
        "warnings": [],
        "tecnico": None,
        "costos": None,
        "produccion": None,
        "financiero": None,
        "metrics": None,
    }
    out.update(extra)
    return out


def _estimar_produccion(
    *,
    mode: str,
    service: Optional[ProductionService],
    size_kw: float,
    latitude: float,
    longitude: float,
    pitch: float,
    azimuth: float,
    losses: Optional[Mapping[str, float]],
    sun_hours: float,
) -> ProductionEstimate:
    if mode == "flat":
        return flat_production_estimate(size_kw, sun_hours)
    if service is None:
        raise ValueError("production_mode='service' requiere production_service.")
    return estimate_production(service, size_kw, latitude, longitude, pitch, azimuth, losses)


# ==========================================================
# ENTRYPOINT
# ==========================================================
def run_design(
    footprint: Footprint,
    panel: Equipment,
    inverter: Optional[Equipment] = None,
    battery: Optional[Equipment] = None,
    pitch: Optional[float] = None,
    azimuth: Optional[float] = None,
    production_service: Optional[ProductionService] = None,
    production_mode: str = "service",
    monthly_usage: Optional[float] = None,
    monthly_bill: Optional[float] = None,
    losses: Optional[Mapping[str, float]] = None,
    config: Optional[DesignConfig] = None,
) -> Dict[str, Any]:
    """
    Flujo lineal estricto:
    Footprint → Layout → Strings → Costos → Producción → Finanzas → Métricas

    Errores de geometría y de entradas financieras vuelven como
    errores estructurados {codigo, mensaje}. ProductionServiceError se
    propaga: el modo "flat" solo corre si se pide explícitamente.
    """
    if production_mode not in PRODUCTION_MODES:
        raise ValueError(f"production_mode inválido: {production_mode!r} (use {PRODUCTION_MODES}).")

    cfg = config or load_configuration()
    roof = cfg.section("roof")
    prod_cfg = cfg.section("production")
    pitch = float(pitch if pitch is not None else roof.get("pitch_deg", 20.0))

    # -------------------------------------------------
    # 1) Footprint
    # -------------------------------------------------
    try:
        roof_area = validate_footprint(footprint)
    except GeometryError as e:
        logger.warning("Footprint inválido: %s", e)
        return _salida_error([e.as_dict()])

    center = centroid(footprint.ring())
    if azimuth is None:
        azimuth = infer_roof_azimuth(footprint.ring(), center.lat)
        logger.debug("Azimut inferido de la arista dominante: %.1f°", azimuth)

    # -------------------------------------------------
    # 2) Layout
    # -------------------------------------------------
    layout = calculate_optimal_layout(
        footprint,
        panel,
        pitch,
        azimuth=float(azimuth),
        config=layout_config_from(cfg),
        latitude=center.lat,
    )
    if not layout.ok:
        return _salida_error([{"codigo": "layout_error", "mensaje": m} for m in layout.errores])

    tecnico: Dict[str, Any] = {
        "roof_area_m2": roof_area,
        "latitude": center.lat,
        "longitude": center.lng,
        "pitch": pitch,
        "azimuth": float(azimuth),
        "layout": layout,
    }
    warnings: List[str] = []

    # -------------------------------------------------
    # 3) Strings + sombras
    # -------------------------------------------------
    strings = strings_from_layout(layout, panel, inverter)
    tecnico["strings"] = strings
    tecnico["sombras"] = calculate_shading(
        [p.position for p in layout.positions], [], pitch, float(azimuth)
    )
    validacion = strings.get("validacion")
    if validacion is not None:
        warnings.extend(validacion.get("warnings") or [])
        if not validacion.get("ok"):
            warnings.append("Configuración de strings inválida para el inversor elegido.")
            warnings.extend(validacion.get("errores") or [])

    # -------------------------------------------------
    # 4) Costos
    # -------------------------------------------------
    size_kw = system_size_kw(layout.total_panels, panel.watts)

    if layout.total_panels == 0:
        warnings.append("El techo no admite paneles con el retiro y el panel elegidos.")
        return {
            "ok": True,
            "errores": [],
            "warnings": warnings,
            "tecnico": tecnico,
            "costos": None,
            "produccion": None,
            "financiero": None,
            "metrics": DesignMetrics(0.0, 0.0, 0.0, roof_area, 0),
        }

    costos = installed_cost(layout.total_panels, panel, inverter, battery, cost_parameters_from(cfg))
    logger.debug("Layout: %d paneles, %.2f kW, costo %.2f", layout.total_panels, size_kw, costos.total)

    # -------------------------------------------------
    # 5) Producción
    # -------------------------------------------------
    produccion = _estimar_produccion(
        mode=production_mode,
        service=production_service,
        size_kw=size_kw,
        latitude=center.lat,
        longitude=center.lng,
        pitch=pitch,
        azimuth=float(azimuth),
        losses=losses if losses is not None else cfg.section("losses"),
        sun_hours=float(prod_cfg.get("average_sun_hours", 4.5)),
    )

    metrics = DesignMetrics(
        system_size_kw=size_kw,
        annual_production_kwh=produccion.annual_kwh,
        estimated_cost=costos.total,
        roof_area_m2=roof_area,
        panel_count=layout.total_panels,
    )

    # -------------------------------------------------
    # 6) Finanzas
    # -------------------------------------------------
    assumptions = financial_assumptions_from(cfg)
    try:
        savings = simulate_savings(
            size_kw,
            costos.total,
            produccion.annual_kwh,
            monthly_usage_kwh=monthly_usage,
            monthly_bill=monthly_bill,
            assumptions=assumptions,
        )
    except InvalidFinancialInputError as e:
        logger.warning("Entradas financieras inválidas: %s", e)
        return _salida_error(
            [e.as_dict()],
            warnings=warnings,
            tecnico=tecnico,
            costos=costos.as_dict(),
            produccion=produccion,
            metrics=metrics,
        )

    financiero = {
        "savings": savings,
        "indicadores": investment_indicators(costos.total, savings, assumptions.discount_rate),
        "beneficios": benefits_summary(costos.total, size_kw, produccion.annual_kwh),
    }

    return {
        "ok": True,
        "errores": [],
        "warnings": warnings,
        "tecnico": tecnico,
        "costos": costos.as_dict(),
        "produccion": produccion,
        "financiero": financiero,
        "metrics": metrics,
    }


def quick_estimate(
    roof_area: float,
    panel: Equipment,
    config: Optional[DesignConfig] = None,
) -> DesignMetrics:
    """Estimación de portada: área del techo → paneles, kW, kWh/año y precio por watt."""
    cfg = config or load_configuration()
    q = cfg.section("quick_estimate")
    prod_cfg = cfg.section("production")

    n = estimate_max_panels(
        roof_area,
        panel.dimensions.width,
        panel.dimensions.height,
        spacing=float(q.get("spacing", 0.1)),
        utilization=float(q.get("utilization", 0.9)),
    )
    size_kw = system_size_kw(n, panel.watts)
    produccion = flat_production_estimate(size_kw, float(prod_cfg.get("average_sun_hours", 4.5)))
    costo = cost_per_watt_estimate(size_kw, cost_parameters_from(cfg).cost_per_watt)

    return DesignMetrics(
        system_size_kw=size_kw,
        annual_production_kwh=produccion.annual_kwh,
        estimated_cost=costo,
        roof_area_m2=float(roof_area),
        panel_count=n,
    )
