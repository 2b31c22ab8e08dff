# core/errores.py
from __future__ import annotations

from typing import List, Optional


class SolarDesignError(Exception):
    """Base de errores del motor de diseño. `code` es estable para la capa UI."""

    code = "solar_design_error"

    def as_dict(self) -> dict:
        return {"codigo": self.code, "mensaje": str(self)}


class GeometryError(SolarDesignError, ValueError):
    code = "geometry_error"


class EquipmentIncompatibilityError(SolarDesignError):
    code = "equipment_incompatible"


class ProductionServiceError(SolarDesignError):
    code = "production_service_error"

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        errors: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.errors = list(errors or [])


class InvalidFinancialInputError(SolarDesignError, ValueError):
    code = "invalid_financial_input"
