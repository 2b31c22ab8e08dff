from __future__ import annotations

from math import ceil, floor
from typing import Any, Dict, List

from core.errores import EquipmentIncompatibilityError
from electrical.catalogos.modelos import MICROINVERTER, STRING_INVERTER, Equipment


# ==========================================================
# Utilitarios numéricos (internos)
# ==========================================================
def _i(x: Any, default: int = 0) -> int:
    try:
        return int(x)
    except (TypeError, ValueError):
        return int(default)


def _resultado_invalido(errores: List[str], *, topologia: str = "N/A", meta: Dict[str, Any] | None = None) -> Dict[str, Any]:
    return {
        "ok": False,
        "is_valid": False,
        "codigo": EquipmentIncompatibilityError.code,
        "errores": errores,
        "warnings": [],
        "topologia": topologia,
        "max_panels_per_string": 0,
        "min_panels_for_power": 0,
        "suggested_configuration": {"strings_count": 0, "panels_per_string": 0, "unused_panels": 0},
        "electrical_parameters": {"string_voltage": 0.0, "string_current": 0.0, "total_power": 0.0},
        "strings": [],
        "meta": meta or {},
    }


# ==========================================================
# Cálculos base
# ==========================================================
def max_panels_per_string(inverter: Equipment, panel: Equipment) -> int:
    """Límite por voltaje: floor(Vmax_inversor / V_panel)."""
    if panel.voltage <= 0:
        return 0
    return int(floor(inverter.max_voltage / panel.voltage))


def min_panels_for_power(inverter: Equipment, panel: Equipment) -> int:
    """Paneles necesarios para cubrir la potencia nominal: ceil(P_inv / W_panel)."""
    if panel.watts <= 0:
        return 0
    return int(ceil(inverter.power_rating / panel.watts))


def check_inverter_pairing(inverter: Equipment, panel: Equipment) -> Dict[str, Any]:
    """Chequeo base del selector de equipos (sin número de paneles)."""
    n_max = max_panels_per_string(inverter, panel)
    n_min = min_panels_for_power(inverter, panel)
    return {
        "max_panels_per_string": n_max,
        "min_panels_for_power": n_min,
        "is_valid": n_max >= n_min,
    }


def _strings_detalle(strings_count: int, panels_per_string: int, panel: Equipment) -> List[Dict[str, Any]]:
    return [
        {
            "string": k + 1,
            "n_panels": int(panels_per_string),
            "voltage": float(panels_per_string) * panel.voltage,
            "current": panel.current,
            "power_w": float(panels_per_string) * panel.watts,
        }
        for k in range(int(strings_count))
    ]


# ==========================================================
# API pública
# ==========================================================
def validate_string_configuration(
    total_panels: int,
    panel: Equipment,
    inverter: Equipment,
) -> Dict[str, Any]:
    """
    Reparte los paneles en strings y valida contra el inversor.

    String:
      strings = ceil(N / max_por_string); por_string = floor(N / strings)
      válido  = max >= min  y  min <= por_string <= max
      sobrantes = N − strings × por_string (siempre reportados)
    Microinversor:
      cada panel es su propio string; siempre válido.

    Una incompatibilidad NO levanta excepción: ok=False + codigo, para que la UI
    ofrezca otro equipo.
    """
    n_total = _i(total_panels, 0)
    meta = {
        "total_panels": n_total,
        "panel_id": panel.id,
        "inverter_id": inverter.id,
    }

    errores: List[str] = []
    if n_total <= 0:
        errores.append("total_panels inválido (<=0).")
    if panel.watts <= 0 or panel.voltage <= 0:
        errores.append("Panel inválido: watts/voltage deben ser > 0.")
    if inverter.power_rating <= 0 or inverter.max_voltage <= 0:
        errores.append("Inversor inválido: powerRating/maxVoltage deben ser > 0.")
    if errores:
        return _resultado_invalido(errores, meta=meta)

    total_power = float(n_total) * panel.watts
    pairing = check_inverter_pairing(inverter, panel)
    n_max = int(pairing["max_panels_per_string"])
    n_min = int(pairing["min_panels_for_power"])

    # -------------------------
    # Microinversores
    # -------------------------
    if inverter.is_microinverter:
        warnings: List[str] = []
        if inverter.power_rating < panel.watts * 0.9:
            warnings.append(
                f"Microinversor subdimensionado: {inverter.power_rating:.0f} W < 90% de {panel.watts:.0f} W."
            )
        return {
            "ok": True,
            "is_valid": True,
            "codigo": None,
            "errores": [],
            "warnings": warnings,
            "topologia": MICROINVERTER,
            "max_panels_per_string": n_max,
            "min_panels_for_power": n_min,
            "suggested_configuration": {
                "strings_count": n_total,
                "panels_per_string": 1,
                "unused_panels": 0,
            },
            "electrical_parameters": {
                "string_voltage": panel.voltage,
                "string_current": panel.current,
                "total_power": total_power,
            },
            "strings": _strings_detalle(n_total, 1, panel),
            "meta": meta,
        }

    # -------------------------
    # Inversor string
    # -------------------------
    if inverter.inverter_type != STRING_INVERTER:
        meta["tipo_declarado"] = inverter.inverter_type

    if n_max <= 0:
        res = _resultado_invalido(
            [f"Voltaje de panel ({panel.voltage:.1f} V) excede Vmax del inversor ({inverter.max_voltage:.1f} V)."],
            topologia=STRING_INVERTER,
            meta=meta,
        )
        res["min_panels_for_power"] = n_min
        res["suggested_configuration"]["unused_panels"] = n_total
        res["electrical_parameters"]["total_power"] = total_power
        return res

    strings_count = int(ceil(n_total / n_max))
    panels_per_string = int(floor(n_total / strings_count))
    unused = n_total - strings_count * panels_per_string

    errores = []
    if n_max < n_min:
        errores.append(
            f"Inversor incompatible: max_panels_per_string={n_max} < min_panels_for_power={n_min}."
        )
    elif not (n_min <= panels_per_string <= n_max):
        errores.append(
            f"String de {panels_per_string} paneles fuera de rango [{n_min}, {n_max}]."
        )

    warnings = []
    if unused > 0:
        warnings.append(f"{unused} panel(es) sin asignar a string.")

    ok = not errores
    return {
        "ok": ok,
        "is_valid": ok,
        "codigo": None if ok else EquipmentIncompatibilityError.code,
        "errores": errores,
        "warnings": warnings,
        "topologia": STRING_INVERTER,
        "max_panels_per_string": n_max,
        "min_panels_for_power": n_min,
        "suggested_configuration": {
            "strings_count": strings_count,
            "panels_per_string": panels_per_string,
            "unused_panels": unused,
        },
        "electrical_parameters": {
            "string_voltage": float(panels_per_string) * panel.voltage,
            "string_current": panel.current,
            "total_power": total_power,
        },
        "strings": _strings_detalle(strings_count, panels_per_string, panel),
        "meta": meta,
    }


def assert_compatible(result: Dict[str, Any]) -> Dict[str, Any]:
    """Para callers que prefieren excepción en lugar del resultado no fatal."""
    if not result.get("is_valid", False):
        detalle = "; ".join(result.get("errores") or []) or "configuración inválida"
        raise EquipmentIncompatibilityError(detalle)
    return result
