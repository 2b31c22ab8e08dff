# Geometría del techo: geodesia, layout de paneles, agrupación manual y sombras.
from __future__ import annotations

from .geodesia import (
    EARTH_RADIUS_M,
    area,
    bearing,
    bounds,
    centroid,
    distance,
    dominant_bearing,
    local_meters,
    local_polygon,
    offset_point,
    point_in_polygon,
    rectangle_ring,
    validate_footprint,
)
from .layout import (
    LayoutConfig,
    LayoutResult,
    calculate_optimal_layout,
    calculate_row_spacing,
    estimate_max_panels,
    grid_fill_placements,
    infer_roof_azimuth,
    winter_solstice_elevation,
)
from .agrupacion import group_into_strings, strings_summary
from .sombras import calculate_shading, sun_position

__all__ = [
    # Geodesia
    "EARTH_RADIUS_M",
    "distance",
    "area",
    "bearing",
    "point_in_polygon",
    "bounds",
    "rectangle_ring",
    "centroid",
    "offset_point",
    "local_meters",
    "local_polygon",
    "dominant_bearing",
    "validate_footprint",
    # Layout
    "LayoutConfig",
    "LayoutResult",
    "calculate_optimal_layout",
    "calculate_row_spacing",
    "estimate_max_panels",
    "grid_fill_placements",
    "infer_roof_azimuth",
    "winter_solstice_elevation",
    # Strings manuales
    "group_into_strings",
    "strings_summary",
    # Sombras
    "calculate_shading",
    "sun_position",
]
