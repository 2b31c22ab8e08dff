# geometria/sombras.py
from __future__ import annotations

import math
from typing import Any, Dict, List, Sequence

from core.modelo import GeoPoint


def sun_position(latitude: float, hour: float, day_of_year: int) -> Dict[str, float]:
    """Modelo simplificado declinación / ángulo horario (no SPA)."""
    declination = 23.45 * math.sin(math.radians((360.0 / 365.0) * (day_of_year - 81)))
    hour_angle = (hour - 12.0) * 15.0

    lat_r = math.radians(latitude)
    dec_r = math.radians(declination)
    ha_r = math.radians(hour_angle)

    elevation = math.degrees(math.asin(
        math.sin(lat_r) * math.sin(dec_r) + math.cos(lat_r) * math.cos(dec_r) * math.cos(ha_r)
    ))
    azimuth = math.degrees(math.atan2(
        math.sin(ha_r),
        math.cos(ha_r) * math.sin(lat_r) - math.tan(dec_r) * math.cos(lat_r),
    )) + 180.0

    return {"azimuth": azimuth, "elevation": elevation}


def _check_obstacles(
    position: GeoPoint,
    sun: Dict[str, float],
    obstacles: Sequence[Sequence[GeoPoint]],
) -> float:
    # TODO: proyectar cada obstáculo hacia el sol (ray casting) y devolver fracción sombreada.
    return 0.0


def calculate_shading(
    positions: Sequence[GeoPoint],
    obstacles: Sequence[Sequence[GeoPoint]],
    pitch: float,
    orientation: float,
    day_of_year: int = 355,
) -> Dict[str, Any]:
    """
    Punto de extensión: hoy reporta sombra cero para cada hora y panel.
    """
    panel_shading: List[Dict[str, Any]] = []
    for pos in positions:
        hourly = [_check_obstacles(pos, sun_position(pos.lat, h, day_of_year), obstacles) for h in range(24)]
        panel_shading.append({
            "position": pos,
            "hourly_shading": hourly,
            "average_shading": sum(hourly) / 24.0,
        })

    total = (
        sum(p["average_shading"] for p in panel_shading) / len(panel_shading)
        if panel_shading else 0.0
    )
    return {
        "panel_shading": panel_shading,
        "total_shading_loss": total,
        "meta": {"pitch": float(pitch), "orientation": float(orientation), "day_of_year": int(day_of_year)},
    }
