# geometria/geodesia.py
"""
Geodesia esférica sobre GeoPoint (grados, sin corrección de datum).

Distancia, rumbo y área salen de pyproj.Geod sobre una esfera de radio
EARTH_RADIUS_M; pertenencia a polígono sale de shapely. Todas las funciones
son puras. La única condición de error es un anillo mal formado (< 3 vértices)
o degenerado (área cero), que levanta GeometryError.
"""
from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from pyproj import Geod
from shapely.geometry import Point, Polygon

from core.errores import GeometryError
from core.modelo import Footprint, GeoPoint

EARTH_RADIUS_M = 6378137.0

# Aproximación plana (válida a escala de un techo)
METERS_PER_DEGREE = 111111.0

_GEOD = Geod(a=EARTH_RADIUS_M, b=EARTH_RADIUS_M)

# Por debajo de esto el anillo se considera degenerado (ruido numérico del área geodésica)
MIN_FOOTPRINT_AREA_M2 = 0.01


# ==========================================================
# Utilidades internas
# ==========================================================

def _open_ring(ring: Sequence[GeoPoint]) -> List[GeoPoint]:
    pts = list(ring)
    if len(pts) > 1 and pts[0] == pts[-1]:
        pts = pts[:-1]
    return pts


def _require_ring(ring: Sequence[GeoPoint]) -> List[GeoPoint]:
    pts = _open_ring(ring)
    if len(pts) < 3:
        raise GeometryError(f"Anillo inválido: se requieren >= 3 vértices (recibidos {len(pts)}).")
    return pts


# ==========================================================
# API pública
# ==========================================================

def distance(a: GeoPoint, b: GeoPoint) -> float:
    """Distancia de gran círculo en metros."""
    _, _, d = _GEOD.inv(a.lng, a.lat, b.lng, b.lat)
    return float(d)


def signed_area(ring: Sequence[GeoPoint]) -> float:
    # positivo en sentido antihorario
    pts = _require_ring(ring)
    a, _ = _GEOD.polygon_area_perimeter([p.lng for p in pts], [p.lat for p in pts])
    return float(a)


def area(ring: Sequence[GeoPoint]) -> float:
    """Área esférica en m²."""
    return abs(signed_area(ring))


def bearing(a: GeoPoint, b: GeoPoint) -> float:
    """Rumbo inicial de a hacia b, en grados [0, 360)."""
    az, _, _ = _GEOD.inv(a.lng, a.lat, b.lng, b.lat)
    return float(az) % 360.0


def lnglat_polygon(ring: Sequence[GeoPoint]) -> Polygon:
    pts = _require_ring(ring)
    return Polygon([(p.lng, p.lat) for p in pts])


def point_in_polygon(point: GeoPoint, ring: Sequence[GeoPoint]) -> bool:
    """Pertenencia en espacio lat/lng; el borde cuenta como dentro."""
    return lnglat_polygon(ring).covers(Point(point.lng, point.lat))


# ==========================================================
# Helpers de techo
# ==========================================================

def bounds(ring: Sequence[GeoPoint]) -> Tuple[GeoPoint, GeoPoint]:
    pts = _require_ring(ring)
    lats = [p.lat for p in pts]
    lngs = [p.lng for p in pts]
    return GeoPoint(min(lats), min(lngs)), GeoPoint(max(lats), max(lngs))


def rectangle_ring(sw: GeoPoint, ne: GeoPoint) -> List[GeoPoint]:
    return [
        GeoPoint(sw.lat, sw.lng),
        GeoPoint(ne.lat, sw.lng),
        GeoPoint(ne.lat, ne.lng),
        GeoPoint(sw.lat, ne.lng),
    ]


def centroid(ring: Sequence[GeoPoint]) -> GeoPoint:
    # Promedio de vértices: suficiente para latitud de sitio.
    pts = _require_ring(ring)
    return GeoPoint(
        sum(p.lat for p in pts) / len(pts),
        sum(p.lng for p in pts) / len(pts),
    )


def offset_point(origin: GeoPoint, east_m: float, north_m: float) -> GeoPoint:
    lat = origin.lat + float(north_m) / METERS_PER_DEGREE
    lng = origin.lng + float(east_m) / (METERS_PER_DEGREE * math.cos(math.radians(origin.lat)))
    return GeoPoint(lat, lng)


def local_meters(origin: GeoPoint, point: GeoPoint) -> Tuple[float, float]:
    """Inversa de offset_point: (este_m, norte_m) respecto a origin."""
    east = (point.lng - origin.lng) * METERS_PER_DEGREE * math.cos(math.radians(origin.lat))
    north = (point.lat - origin.lat) * METERS_PER_DEGREE
    return east, north


def local_polygon(origin: GeoPoint, ring: Sequence[GeoPoint]) -> Polygon:
    """Anillo proyectado a metros locales (este, norte) alrededor de origin."""
    pts = _require_ring(ring)
    return Polygon([local_meters(origin, p) for p in pts])


def dominant_bearing(ring: Sequence[GeoPoint]) -> float:
    """Rumbo de la arista más larga del anillo."""
    pts = _require_ring(ring)
    best_len = -1.0
    best = 0.0
    for i in range(len(pts)):
        a, b = pts[i], pts[(i + 1) % len(pts)]
        d = distance(a, b)
        if d > best_len:
            best_len, best = d, bearing(a, b)
    return best


def validate_footprint(footprint: Footprint) -> float:
    """Devuelve el área del footprint; GeometryError si es degenerado."""
    a = area(footprint.ring())
    if a <= MIN_FOOTPRINT_AREA_M2:
        raise GeometryError("Footprint con área cero (vértices colineales o repetidos).")
    return a
