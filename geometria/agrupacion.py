# geometria/agrupacion.py
# Agrupación de paneles colocados a mano en strings por encadenamiento greedy.
from __future__ import annotations

from typing import List, Optional, Sequence

from core.modelo import PanelPlacement, StringConfiguration
from electrical.catalogos.modelos import Equipment

from .geodesia import distance

MAX_LINK_DISTANCE_M = 1.0
MAX_ROTATION_DELTA_DEG = 5.0


def group_into_strings(
    placements: Sequence[PanelPlacement],
    inverter: Optional[Equipment] = None,
    *,
    max_distance_m: float = MAX_LINK_DISTANCE_M,
    max_rotation_deg: float = MAX_ROTATION_DELTA_DEG,
) -> List[StringConfiguration]:
    """
    Encadenamiento por vecino más cercano, NO clustering:

    - Semilla = primer panel sin asignar.
    - Se recorre el resto en orden; un panel se une si está a < max_distance_m
      del ÚLTIMO panel agregado y su rotación difiere < max_rotation_deg
      (diferencia directa de la rotación tal como llega, sin normalizar ni envolver 360°).
    - Al unirse, el recorrido sigue desde la misma posición con el nuevo último.

    O(n²) en el peor caso y dependiente del orden de entrada.
    """
    strings: List[StringConfiguration] = []
    remaining = list(placements)

    while remaining:
        cadena = [remaining[0]]
        remaining = remaining[1:]

        i = 0
        while i < len(remaining):
            candidato = remaining[i]
            ultimo = cadena[-1]
            d = distance(ultimo.position, candidato.position)
            if d < max_distance_m and abs(ultimo.rotation - candidato.rotation) < max_rotation_deg:
                cadena.append(candidato)
                del remaining[i]
                continue
            i += 1

        strings.append(
            StringConfiguration(
                id=f"string-{len(strings) + 1}",
                panels=tuple(cadena),
                inverter=inverter,
            )
        )

    return strings


def strings_summary(strings: Sequence[StringConfiguration]) -> List[dict]:
    out: List[dict] = []
    for s in strings:
        watts = sum(p.panel.watts for p in s.panels if p.panel is not None)
        out.append({
            "id": s.id,
            "n_panels": s.panel_count,
            "kw": watts / 1000.0,
            "inverter": s.inverter.model if s.inverter is not None else None,
        })
    return out
