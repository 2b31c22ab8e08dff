# electrical/catalogos/catalogos.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from .catalogos_yaml import DATA_DIR, load_equipment_yaml
from .modelos import BATTERY, INVERTER, PANEL, Dimensions, Equipment

logger = logging.getLogger(__name__)

# ==========================================================
# Catálogo base (hardcoded)
# ==========================================================

_PANELES: Dict[str, Equipment] = {
    "rec400aa": Equipment(
        id="rec400aa",
        manufacturer="REC",
        model="Alpha 400W",
        specifications={
            "watts": 400,
            "efficiency": 21.7,
            "voltage": 40.5,
            "current": 9.9,
            "warranty": 25,
            "type": "Monocrystalline",
            "cost": 400,
        },
        dimensions=Dimensions(width=1.7, height=1.0, depth=0.04, weight=20),
        role=PANEL,
    ),
    "lg450": Equipment(
        id="lg450",
        manufacturer="LG",
        model="NeON H 450W",
        specifications={
            "watts": 450,
            "efficiency": 22.1,
            "voltage": 41.3,
            "current": 10.9,
            "warranty": 25,
            "type": "Monocrystalline",
            "cost": 450,
        },
        dimensions=Dimensions(width=1.8, height=1.1, depth=0.04, weight=21),
        role=PANEL,
    ),
}

_INVERSORES: Dict[str, Equipment] = {
    "se7600h": Equipment(
        id="se7600h",
        manufacturer="SolarEdge",
        model="SE7600H-US",
        specifications={
            "powerRating": 7600,
            "efficiency": 99,
            "maxVoltage": 480,
            "warranty": 12,
            "type": "String",
            "cost": 1800,
        },
        dimensions=Dimensions(width=0.54, height=0.32, depth=0.19, weight=22),
        role=INVERTER,
    ),
    "iq8plus": Equipment(
        id="iq8plus",
        manufacturer="Enphase",
        model="IQ8+",
        specifications={
            "powerRating": 290,
            "efficiency": 97,
            "maxVoltage": 48,
            "warranty": 25,
            "type": "Microinverter",
            "cost": 215,
        },
        dimensions=Dimensions(width=0.21, height=0.17, depth=0.03, weight=1.1),
        role=INVERTER,
    ),
}

_BATERIAS: Dict[str, Equipment] = {
    "pw2": Equipment(
        id="pw2",
        manufacturer="Tesla",
        model="Powerwall 2",
        specifications={
            "capacity": 13.5,
            "powerOutput": 5.0,
            "warranty": 10,
            "cycles": 3200,
            "type": "Lithium-ion",
            "cost": 8500,
        },
        dimensions=Dimensions(width=1.15, height=0.75, depth=0.15, weight=114),
        role=BATTERY,
    ),
    "encharge10": Equipment(
        id="encharge10",
        manufacturer="Enphase",
        model="Encharge 10",
        specifications={
            "capacity": 10.1,
            "powerOutput": 3.84,
            "warranty": 10,
            "cycles": 4000,
            "type": "Lithium-iron-phosphate",
            "cost": 8000,
        },
        dimensions=Dimensions(width=0.87, height=1.14, depth=0.22, weight=155),
        role=BATTERY,
    ),
}

_BASE = {PANEL: _PANELES, INVERTER: _INVERSORES, BATTERY: _BATERIAS}

_YAML_EQUIPOS = DATA_DIR / "equipment.yaml"


def _merge(role: str, yaml_path: Optional[Path] = None) -> Dict[str, Equipment]:
    out = dict(_BASE[role])
    path = Path(yaml_path) if yaml_path is not None else _YAML_EQUIPOS
    if path.exists():
        extra = load_equipment_yaml(path.resolve())[role]
        logger.debug("Catálogo YAML %s: %d equipos (%s)", path, len(extra), role)
        out.update(extra)
    return out


# ==========================================================
# API pública (fuente de verdad)
# ==========================================================

def get_panel(panel_id: str, yaml_path: Optional[Path] = None) -> Equipment:
    paneles = _merge(PANEL, yaml_path)
    if panel_id in paneles:
        return paneles[panel_id]
    raise KeyError(f"Panel no existe en catálogo: {panel_id}")


def get_inverter(inverter_id: str, yaml_path: Optional[Path] = None) -> Equipment:
    inversores = _merge(INVERTER, yaml_path)
    if inverter_id in inversores:
        return inversores[inverter_id]
    raise KeyError(f"Inversor no existe en catálogo: {inverter_id}")


def get_battery(battery_id: str, yaml_path: Optional[Path] = None) -> Equipment:
    baterias = _merge(BATTERY, yaml_path)
    if battery_id in baterias:
        return baterias[battery_id]
    raise KeyError(f"Batería no existe en catálogo: {battery_id}")


def equipment_catalog(yaml_path: Optional[Path] = None) -> Dict[str, List[Equipment]]:
    """Las tres listas que consume el diseñador: panels, inverters, batteries."""
    return {
        "panels": [e for _, e in sorted(_merge(PANEL, yaml_path).items())],
        "inverters": [e for _, e in sorted(_merge(INVERTER, yaml_path).items())],
        "batteries": [e for _, e in sorted(_merge(BATTERY, yaml_path).items())],
    }
