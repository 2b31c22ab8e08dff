# Filtros del selector de equipos: qué inversores y baterías tienen sentido para el sistema.
from __future__ import annotations

from typing import List, Optional, Sequence

from electrical.catalogos.modelos import Equipment

STRING_MIN_RATIO = 0.9
STRING_MAX_RATIO = 1.2
MICRO_MIN_RATIO = 0.9

BATTERY_MIN_KWH_PER_KW = 2.0
BATTERY_MAX_KWH_PER_KW = 4.0


def compatible_inverters(
    inverters: Sequence[Equipment],
    panel: Optional[Equipment],
    system_size_kw: Optional[float],
) -> List[Equipment]:
    """
    String: powerRating en [90%, 120%] de la potencia total.
    Micro:  powerRating >= 90% de la potencia de un panel.
    Sin panel o sin tamaño, no se filtra.
    """
    if panel is None or not system_size_kw:
        return list(inverters)

    total_w = float(system_size_kw) * 1000.0
    out: List[Equipment] = []
    for inv in inverters:
        if inv.is_microinverter:
            if inv.power_rating >= panel.watts * MICRO_MIN_RATIO:
                out.append(inv)
        elif total_w * STRING_MIN_RATIO <= inv.power_rating <= total_w * STRING_MAX_RATIO:
            out.append(inv)
    return out


def compatible_batteries(
    batteries: Sequence[Equipment],
    system_size_kw: Optional[float],
) -> List[Equipment]:
    if not system_size_kw:
        return list(batteries)

    lo = float(system_size_kw) * BATTERY_MIN_KWH_PER_KW
    hi = float(system_size_kw) * BATTERY_MAX_KWH_PER_KW
    return [b for b in batteries if lo <= b.capacity <= hi]
