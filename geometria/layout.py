# geometria/layout.py
# Motor de layout: coloca una grilla de paneles dentro del footprint respetando
# retiros de borde y espaciamiento entre filas por sombra de solsticio de invierno.
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from shapely.affinity import affine_transform
from shapely.geometry import Point, Polygon, box

from core.modelo import Footprint, GeoPoint, PanelPlacement
from electrical.catalogos.modelos import Equipment

from .geodesia import (
    area,
    bounds,
    centroid,
    distance,
    dominant_bearing,
    lnglat_polygon,
    local_polygon,
    offset_point,
)

# Declinación aproximada en solsticio de invierno (hemisferio norte)
WINTER_SOLSTICE_DECLINATION = -23.45
ROW_SPACING_BUFFER = 1.1


@dataclass(frozen=True)
class LayoutConfig:
    panel_spacing: float = 0.025      # m entre paneles de una fila
    edge_setback: float = 0.5         # m desde cada borde del techo
    row_spacing: float = 0.4          # m, solo si la sombra calculada es <= 0
    row_spacing_override: Optional[float] = None
    min_row_length: int = 2           # paneles mínimos para aceptar una fila


@dataclass(frozen=True)
class LayoutResult:
    ok: bool
    errores: List[str]

    total_panels: int
    panels_per_row: int
    number_of_rows: int
    positions: List[PanelPlacement]

    row_spacing: float
    panel_spacing: float
    effective_panel_height: float

    usable_width: float
    usable_length: float
    footprint_area: float
    coverage: float                   # 0..1, área en planta / footprint
    panel_area_ratio: float           # área física de paneles / footprint (puede pasar de 1)

    meta: Dict[str, Any] = field(default_factory=dict)


# ==========================================================
# Geometría solar (aproximación documentada)
# ==========================================================

def winter_solstice_elevation(latitude: float) -> float:
    """
    Elevación solar mínima aproximada: 90 − lat − δ, con δ = −23.45°.
    Es una simplificación deliberada, no un algoritmo de posición solar.
    """
    return 90.0 - float(latitude) - WINTER_SOLSTICE_DECLINATION


def calculate_row_spacing(
    panel_height: float,
    pitch: float,
    latitude: float,
    config: Optional[LayoutConfig] = None,
) -> float:
    """
    sombra × 1.1, con sombra = alto × sin(pitch) / tan(elevación).
    Pitch 0° o elevación >= 90° dejan sombra <= 0: manda config.row_spacing.
    """
    cfg = config or LayoutConfig()
    if cfg.row_spacing_override is not None:
        return float(cfg.row_spacing_override)

    elevation = winter_solstice_elevation(latitude)
    if elevation >= 90.0:
        return float(cfg.row_spacing)

    projected = float(panel_height) * math.sin(math.radians(float(pitch)))
    shadow = projected / math.tan(math.radians(elevation))
    if shadow <= 0:
        return float(cfg.row_spacing)
    return shadow * ROW_SPACING_BUFFER


def infer_roof_azimuth(ring: Sequence[GeoPoint], latitude: float) -> float:
    """Perpendicular a la arista dominante, la que mira hacia el ecuador."""
    edge = dominant_bearing(ring)
    target = 180.0 if latitude >= 0 else 0.0
    candidatos = [(edge + 90.0) % 360.0, (edge + 270.0) % 360.0]

    def _delta(az: float) -> float:
        d = abs(az - target) % 360.0
        return min(d, 360.0 - d)

    return min(candidatos, key=_delta)


# ==========================================================
# Helpers de grilla
# ==========================================================

def _grid_transform(rotation_deg: float, setback: float) -> List[float]:
    # grilla (x al este, y al sur desde el ancla retirada) → metros locales (este, norte) desde NW
    a = math.radians(rotation_deg)
    c, s = math.cos(a), math.sin(a)
    return [c, s, s, -c, setback, -setback]


def _to_local(m: Sequence[float], x_m: float, y_m: float) -> Tuple[float, float]:
    return m[0] * x_m + m[1] * y_m + m[4], m[2] * x_m + m[3] * y_m + m[5]


def _panel_inside(
    roof: Polygon,
    m: Sequence[float],
    x_m: float,
    y_m: float,
    w_m: float,
    h_m: float,
) -> bool:
    panel = affine_transform(box(x_m, y_m, x_m + w_m, y_m + h_m), m)
    return roof.contains(panel)


def _empty_result(
    *,
    errores: List[str],
    row_spacing: float,
    panel_spacing: float,
    effective_panel_height: float,
    usable_width: float,
    usable_length: float,
    footprint_area: float,
    meta: Dict[str, Any],
) -> LayoutResult:
    return LayoutResult(
        ok=not errores,
        errores=errores,
        total_panels=0,
        panels_per_row=0,
        number_of_rows=0,
        positions=[],
        row_spacing=row_spacing,
        panel_spacing=panel_spacing,
        effective_panel_height=effective_panel_height,
        usable_width=usable_width,
        usable_length=usable_length,
        footprint_area=footprint_area,
        coverage=0.0,
        panel_area_ratio=0.0,
        meta=meta,
    )


# ==========================================================
# API pública
# ==========================================================

def calculate_optimal_layout(
    footprint: Footprint,
    panel: Equipment,
    pitch: float,
    azimuth: float = 180.0,
    config: Optional[LayoutConfig] = None,
    latitude: Optional[float] = None,
) -> LayoutResult:
    """
    Grilla de paneles sobre el footprint.

    - Dimensiones útiles = bounds − 2 × retiro.
    - Alto efectivo = alto × cos(pitch) (vista en planta).
    - Rotación de grilla = azimut − 180 (techo al sur no rota).
    - Polígonos (o grillas rotadas): un panel entra solo si su rectángulo, en
      metros locales, queda contenido en el techo. Filas con menos de
      min_row_length se descartan.
    - coverage usa el área en planta; panel_area_ratio, el área física del panel.
    """
    cfg = config or LayoutConfig()
    ring = footprint.ring()
    fp_area = area(ring)

    sw, ne = bounds(ring)
    nw = GeoPoint(ne.lat, sw.lng)
    width = distance(nw, ne)
    length = distance(nw, sw)

    lat = float(latitude) if latitude is not None else centroid(ring).lat
    setback = float(cfg.edge_setback)
    usable_w = width - 2.0 * setback
    usable_l = length - 2.0 * setback

    panel_w = float(panel.dimensions.width)
    panel_h = float(panel.dimensions.height)
    eff_h = panel_h * math.cos(math.radians(float(pitch)))
    row_spacing = calculate_row_spacing(panel_h, pitch, lat, cfg)

    rotation = (float(azimuth) - 180.0) % 360.0
    meta = {
        "latitude": lat,
        "pitch": float(pitch),
        "azimuth": float(azimuth),
        "grid_rotation": rotation,
        "bounds_width": width,
        "bounds_length": length,
        "footprint_kind": footprint.kind,
    }

    errores: List[str] = []
    if panel_w <= 0 or panel_h <= 0:
        errores.append("Panel sin dimensiones válidas (width/height <= 0).")
    if eff_h <= 0:
        errores.append("Pitch inválido: alto efectivo <= 0.")

    if errores or usable_w <= 0 or usable_l <= 0:
        return _empty_result(
            errores=errores,
            row_spacing=row_spacing,
            panel_spacing=float(cfg.panel_spacing),
            effective_panel_height=max(eff_h, 0.0),
            usable_width=max(usable_w, 0.0),
            usable_length=max(usable_l, 0.0),
            footprint_area=fp_area,
            meta=meta,
        )

    step_x = panel_w + float(cfg.panel_spacing)
    step_y = eff_h + row_spacing
    panels_per_row = int(math.floor(usable_w / step_x))
    number_of_rows = int(math.floor(usable_l / step_y))

    m = _grid_transform(rotation, setback)
    rotated = abs(((rotation + 180.0) % 360.0) - 180.0) > 1e-9
    roof = local_polygon(nw, ring) if rotated or not footprint.is_rectangle else None

    positions: List[PanelPlacement] = []
    for row in range(number_of_rows):
        fila: List[PanelPlacement] = []
        y = row * step_y
        for col in range(panels_per_row):
            x = col * step_x
            if roof is not None and not _panel_inside(roof, m, x, y, panel_w, eff_h):
                continue
            east, north = _to_local(m, x, y)
            fila.append(
                PanelPlacement(
                    id=f"r{row}-c{col}",
                    position=offset_point(nw, east_m=east, north_m=north),
                    rotation=rotation,
                    panel=panel,
                )
            )
        if len(fila) < int(cfg.min_row_length):
            continue
        positions.extend(fila)

    plan_area = len(positions) * panel_w * eff_h
    coverage = plan_area / fp_area if fp_area > 0 else 0.0
    panel_area_ratio = len(positions) * panel_w * panel_h / fp_area if fp_area > 0 else 0.0

    return LayoutResult(
        ok=True,
        errores=[],
        total_panels=len(positions),
        panels_per_row=panels_per_row,
        number_of_rows=number_of_rows,
        positions=positions,
        row_spacing=row_spacing,
        panel_spacing=float(cfg.panel_spacing),
        effective_panel_height=eff_h,
        usable_width=usable_w,
        usable_length=usable_l,
        footprint_area=fp_area,
        coverage=max(0.0, min(1.0, coverage)),
        panel_area_ratio=panel_area_ratio,
        meta=meta,
    )


def estimate_max_panels(
    roof_area: float,
    panel_width: float,
    panel_height: float,
    spacing: float = 0.1,
    utilization: float = 0.9,
) -> int:
    """Estimación rápida por área: floor(área × util / (área_panel × (1 + spacing)))."""
    panel_area = float(panel_width) * float(panel_height)
    if panel_area <= 0 or roof_area <= 0:
        return 0
    return int(math.floor(float(roof_area) * float(utilization) / (panel_area * (1.0 + float(spacing)))))


def grid_fill_placements(
    footprint: Footprint,
    panel: Equipment,
    rotation: float = 0.0,
    spacing: float = 0.1,
) -> List[PanelPlacement]:
    """
    Relleno del diseñador manual: grilla casi cuadrada de celdas sobre los bounds,
    un panel por centro de celda que caiga dentro del footprint.
    """
    ring = footprint.ring()
    n_max = estimate_max_panels(area(ring), panel.dimensions.width, panel.dimensions.height, spacing, 1.0)
    if n_max <= 0:
        return []

    roof = lnglat_polygon(ring)
    sw, ne = bounds(ring)
    lat_span = ne.lat - sw.lat
    lng_span = ne.lng - sw.lng
    rows = int(math.ceil(math.sqrt(n_max)))
    cols = int(math.ceil(n_max / rows))

    out: List[PanelPlacement] = []
    for row in range(rows):
        for col in range(cols):
            p = GeoPoint(
                sw.lat + lat_span * (row + 0.5) / rows,
                sw.lng + lng_span * (col + 0.5) / cols,
            )
            if roof.covers(Point(p.lng, p.lat)):
                out.append(PanelPlacement(id=f"{row}-{col}", position=p, rotation=rotation, panel=panel))
    return out
