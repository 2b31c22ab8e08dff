"""
nrel.py: cliente HTTP de las APIs de NREL usadas por el diseñador.

    PVWatts v8       → producción anual / mensual / horaria del arreglo
    Solar Resource   → irradiancia promedio del sitio
    Utility Rates v3 → tarifa residencial de referencia ($/kWh)

Sin reintentos ni fallback: cualquier respuesta no exitosa, payload con
`errors` o salida mal formada se propaga como ProductionServiceError.
El timeout lo decide quien llama.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import requests

from core.errores import ProductionServiceError

from .contrato import ProductionRequest, ProductionResponse

logger = logging.getLogger(__name__)

NREL_BASE_URL = "https://developer.nrel.gov"
PVWATTS_PATH = "/api/pvwatts/v8.json"
SOLAR_RESOURCE_PATH = "/api/solar/v1/resource.json"
UTILITY_RATES_PATH = "/api/utility_rates/v3.json"

# Parámetros v8 fijos del diseñador residencial
PVWATTS_V8_DEFAULTS: Dict[str, Any] = {
    "dc_ac_ratio": 1.2,
    "gcr": 0.4,
    "inv_eff": 96.0,
    "radius": 0,
    "dataset": "nsrdb",
    "bifaciality": 0,
    "albedo": 0.2,
    "soiling": "|".join(["0"] * 12),
}

DEFAULT_TIMEOUT_S = 30.0


class NRELClient:
    def __init__(
        self,
        api_key: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_S,
        session: Optional[requests.Session] = None,
        base_url: str = NREL_BASE_URL,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()
        self.base_url = base_url.rstrip("/")

    @classmethod
    def from_env(cls, **kwargs: Any) -> "NRELClient":
        api_key = os.environ.get("NREL_API_KEY", "")
        if not api_key:
            logger.warning("NREL_API_KEY no está definido; las llamadas a NREL fallarán.")
        return cls(api_key, **kwargs)

    # ------------------------------------------------------
    # Transporte
    # ------------------------------------------------------
    def _get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        query = {"api_key": self.api_key, **params}

        try:
            response = self.session.get(url, params=query, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("NREL request failed (%s): %s", path, exc)
            raise ProductionServiceError(f"NREL request failed: {exc}") from exc

        if not response.ok:
            logger.error("NREL API error %s en %s", response.status_code, path)
            raise ProductionServiceError(
                f"NREL API error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ProductionServiceError("NREL API devolvió un cuerpo no JSON.") from exc

        if not isinstance(data, dict):
            raise ProductionServiceError("NREL API devolvió un payload inesperado.")

        errors = data.get("errors") or []
        if errors:
            errors = [str(e) for e in errors]
            logger.error("NREL API validation error: %s", errors)
            raise ProductionServiceError(
                f"NREL API validation error: {', '.join(errors)}",
                status_code=response.status_code,
                errors=errors,
            )

        return data

    # ------------------------------------------------------
    # PVWatts
    # ------------------------------------------------------
    def calculate_production(self, request: ProductionRequest) -> ProductionResponse:
        params = {
            "format": "json",
            "system_capacity": request.system_capacity_kw,
            "module_type": request.module_type,
            "losses": request.total_loss_pct,
            "array_type": request.array_type,
            "tilt": request.tilt_deg,
            "azimuth": request.azimuth_deg,
            "lat": request.latitude,
            "lon": request.longitude,
            **PVWATTS_V8_DEFAULTS,
        }
        data = self._get(PVWATTS_PATH, params)

        try:
            outputs = data["outputs"]
            annual = float(outputs["ac_annual"])
            monthly: List[float] = [float(v) for v in outputs["ac_monthly"]]
            hourly: List[float] = [float(v) for v in (outputs.get("ac") or [])]
        except (KeyError, TypeError, ValueError) as exc:
            raise ProductionServiceError(f"No se pudo interpretar la respuesta PVWatts: {exc}") from exc

        if len(monthly) != 12:
            raise ProductionServiceError(f"PVWatts devolvió {len(monthly)} meses (se esperaban 12).")

        return ProductionResponse(annual_kwh=annual, monthly_kwh=monthly, hourly_kwh=hourly)

    # ------------------------------------------------------
    # Recurso solar y tarifas
    # ------------------------------------------------------
    def solar_resource(self, latitude: float, longitude: float) -> Dict[str, float]:
        data = self._get(SOLAR_RESOURCE_PATH, {"lat": latitude, "lon": longitude})
        try:
            outputs = data["outputs"]
            return {
                "avg_dni": float(outputs["avg_dni"]["annual"]),
                "avg_ghi": float(outputs["avg_ghi"]["annual"]),
                "avg_lat_tilt": float(outputs["avg_lat_tilt"]["annual"]),
            }
        except (KeyError, TypeError, ValueError) as exc:
            raise ProductionServiceError(f"Respuesta de recurso solar inválida: {exc}") from exc

    def residential_rate(self, latitude: float, longitude: float) -> float:
        data = self._get(UTILITY_RATES_PATH, {"lat": latitude, "lon": longitude})
        try:
            rate = float(data["outputs"]["residential"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ProductionServiceError(f"Respuesta de tarifas inválida: {exc}") from exc
        if rate <= 0:
            raise ProductionServiceError("Tarifa residencial no disponible para el sitio.")
        return rate
