# Orquestador del dominio paneles: toma el layout del techo y ejecuta el motor de strings.
from __future__ import annotations

from typing import Any, Dict, List, Optional

from core.modelo import StringConfiguration
from electrical.catalogos.modelos import Equipment
from geometria.agrupacion import group_into_strings, strings_summary
from geometria.layout import LayoutResult

from .calculo_de_strings import validate_string_configuration


def validate_layout(layout: LayoutResult, panel: Equipment, inverter: Equipment) -> Dict[str, Any]:
    """Valida strings a partir del conteo del layout y agrega la vista por filas."""
    res = validate_string_configuration(layout.total_panels, panel, inverter)
    res["meta"] = {
        **(res.get("meta") or {}),
        "panels_per_row": layout.panels_per_row,
        "number_of_rows": layout.number_of_rows,
    }
    return res


def strings_from_layout(
    layout: LayoutResult,
    panel: Equipment,
    inverter: Optional[Equipment],
) -> Dict[str, Any]:
    """
    Dos vistas complementarias:
    - validacion: reparto eléctrico contra el inversor (si hay inversor).
    - grupos: encadenamiento físico de los paneles colocados.
    """
    grupos: List[StringConfiguration] = group_into_strings(layout.positions, inverter)

    validacion: Optional[Dict[str, Any]] = None
    if inverter is not None and layout.total_panels > 0:
        validacion = validate_layout(layout, panel, inverter)

    return {
        "ok": validacion is None or bool(validacion.get("ok")),
        "validacion": validacion,
        "grupos": grupos,
        "resumen_grupos": strings_summary(grupos),
    }
