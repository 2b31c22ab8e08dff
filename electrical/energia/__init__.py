# Energía FV: pérdidas, contrato del servicio de producción, cliente NREL y estimadores.
from __future__ import annotations

from .contrato import ProductionEstimate, ProductionRequest, ProductionResponse
from .nrel import NRELClient
from .perdidas import DEFAULT_LOSSES, merge_losses, performance_ratio, total_losses
from .produccion import (
    DEFAULT_SUN_HOURS,
    build_production_request,
    estimate_production,
    flat_production_estimate,
)

__all__ = [
    "ProductionRequest",
    "ProductionResponse",
    "ProductionEstimate",
    "NRELClient",
    "DEFAULT_LOSSES",
    "merge_losses",
    "total_losses",
    "performance_ratio",
    "DEFAULT_SUN_HOURS",
    "build_production_request",
    "estimate_production",
    "flat_production_estimate",
]
