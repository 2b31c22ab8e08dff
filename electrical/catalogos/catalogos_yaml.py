# electrical/catalogos/catalogos_yaml.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml

from .modelos import BATTERY, INVERTER, PANEL, REQUIRED_SPECS, Dimensions, Equipment

DATA_DIR = Path("data")

_SECCIONES = {
    "panels": PANEL,
    "inverters": INVERTER,
    "batteries": BATTERY,
}


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def _req(d: Dict[str, Any], k: str, ctx: str) -> Any:
    if k not in d or d[k] is None:
        raise ValueError(f"Falta '{k}' en {ctx}")
    return d[k]


def _req_num(d: Dict[str, Any], k: str, ctx: str) -> float:
    v = _req(d, k, ctx)
    try:
        return float(v)
    except (TypeError, ValueError) as e:
        raise ValueError(f"'{k}' debe ser numérico en {ctx}. Valor={v!r}") from e


def _validate_equipment(eid: str, e: Dict[str, Any], role: str, ctx: str) -> None:
    if not isinstance(e, dict):
        raise ValueError(f"{ctx}.{eid} debe ser un mapping")

    _req(e, "manufacturer", f"{ctx}.{eid}")
    _req(e, "model", f"{ctx}.{eid}")

    specs = _req(e, "specifications", f"{ctx}.{eid}")
    for k in REQUIRED_SPECS[role]:
        if k == "type":
            _req(specs, k, f"{ctx}.{eid}.specifications")
        else:
            _req_num(specs, k, f"{ctx}.{eid}.specifications")

    dims = _req(e, "dimensions", f"{ctx}.{eid}")
    _req_num(dims, "width", f"{ctx}.{eid}.dimensions")
    _req_num(dims, "height", f"{ctx}.{eid}.dimensions")


def equipment_from_dict(eid: str, e: Dict[str, Any], role: str, ctx: str = "catalogo") -> Equipment:
    _validate_equipment(eid, e, role, ctx)
    dims = e["dimensions"]
    return Equipment(
        id=str(e.get("id") or eid),
        manufacturer=str(e["manufacturer"]).strip(),
        model=str(e["model"]).strip(),
        specifications=dict(e["specifications"]),
        dimensions=Dimensions(
            width=float(dims["width"]),
            height=float(dims["height"]),
            depth=float(dims["depth"]) if dims.get("depth") is not None else None,
            weight=float(dims["weight"]) if dims.get("weight") is not None else None,
        ),
        role=role,
    )


def load_equipment_yaml(path: str | Path = "equipment.yaml") -> Dict[str, Dict[str, Equipment]]:
    """
    Lee un catálogo con secciones `panels`, `inverters`, `batteries`.
    Cada sección es un mapping id -> {manufacturer, model, specifications, dimensions}.
    Una ruta relativa se resuelve contra DATA_DIR.
    """
    p = Path(path)
    if not p.is_absolute():
        p = DATA_DIR / p
    doc = _read_yaml(p)

    out: Dict[str, Dict[str, Equipment]] = {role: {} for role in _SECCIONES.values()}
    if not isinstance(doc, dict):
        return out

    for seccion, role in _SECCIONES.items():
        items = doc.get(seccion) or {}
        for eid, e in items.items():
            out[role][str(eid)] = equipment_from_dict(str(eid), e, role, ctx=seccion)

    return out
