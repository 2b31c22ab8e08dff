# core/modelo.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from .errores import GeometryError

if TYPE_CHECKING:
    from electrical.catalogos.modelos import Equipment


# ==========================================================
# Geometría
# ==========================================================

@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class Footprint:
    """
    Snapshot de solo lectura del techo dibujado por el usuario.
    kind: "rectangle" (4 esquinas desde bounds) o "polygon" (anillo libre).
    """

    vertices: Tuple[GeoPoint, ...]
    kind: str = "polygon"

    @classmethod
    def from_bounds(cls, sw: GeoPoint, ne: GeoPoint) -> "Footprint":
        if ne.lat <= sw.lat or ne.lng <= sw.lng:
            raise GeometryError(
                f"Bounds invertidos: sw=({sw.lat}, {sw.lng}) ne=({ne.lat}, {ne.lng})"
            )
        ring = (
            GeoPoint(sw.lat, sw.lng),
            GeoPoint(ne.lat, sw.lng),
            GeoPoint(ne.lat, ne.lng),
            GeoPoint(sw.lat, ne.lng),
        )
        return cls(vertices=ring, kind="rectangle")

    @classmethod
    def from_ring(cls, points: Sequence[GeoPoint]) -> "Footprint":
        pts = list(points)
        if len(pts) > 1 and pts[0] == pts[-1]:
            pts = pts[:-1]
        if len(pts) < 3:
            raise GeometryError(f"El polígono requiere >= 3 vértices (recibidos {len(pts)}).")
        return cls(vertices=tuple(pts), kind="polygon")

    @property
    def is_rectangle(self) -> bool:
        return self.kind == "rectangle"

    def ring(self) -> List[GeoPoint]:
        return list(self.vertices)

    def bounds(self) -> Tuple[GeoPoint, GeoPoint]:
        lats = [p.lat for p in self.vertices]
        lngs = [p.lng for p in self.vertices]
        return GeoPoint(min(lats), min(lngs)), GeoPoint(max(lats), max(lngs))


# ==========================================================
# Diseño
# ==========================================================

@dataclass(frozen=True)
class PanelPlacement:
    id: str
    position: GeoPoint
    rotation: float
    panel: Optional["Equipment"] = None

    def __post_init__(self):
        object.__setattr__(self, "rotation", float(self.rotation))


@dataclass(frozen=True)
class StringConfiguration:
    id: str
    panels: Tuple[PanelPlacement, ...]
    inverter: Optional["Equipment"] = None

    def __post_init__(self):
        if not self.panels:
            raise ValueError("StringConfiguration requiere al menos un panel.")

    @property
    def panel_count(self) -> int:
        return len(self.panels)


@dataclass(frozen=True)
class DesignMetrics:
    system_size_kw: float
    annual_production_kwh: float
    estimated_cost: float
    roof_area_m2: float
    panel_count: int


# ==========================================================
# Finanzas
# ==========================================================

@dataclass(frozen=True)
class YearlyProjection:
    year: int
    traditional_bill: float
    solar_cost: float
    annual_savings: float
    cumulative_savings: float
    electricity_rate: float
    production_kwh: float


@dataclass(frozen=True)
class SavingsResult:
    yearly: List[YearlyProjection] = field(default_factory=list)
    first_year_savings: float = 0.0
    monthly_payment: float = 0.0
    payback_period: int = 0           # 0 = no se alcanza en el horizonte
    roi: float = 0.0                  # %
    current_rate: float = 0.0         # $/kWh año 1
    offset_percentage: float = 0.0    # 0..100
    loan_amount: float = 0.0
    annual_usage_kwh: float = 0.0

    @property
    def lifetime_savings(self) -> float:
        return self.yearly[-1].cumulative_savings if self.yearly else 0.0
