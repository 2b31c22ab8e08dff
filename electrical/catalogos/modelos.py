# electrical/catalogos/modelos.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

PANEL = "panel"
INVERTER = "inverter"
BATTERY = "battery"

STRING_INVERTER = "String"
MICROINVERTER = "Microinverter"

# Claves mínimas de `specifications` por rol.
REQUIRED_SPECS = {
    PANEL: ("watts", "efficiency", "voltage", "current", "cost"),
    INVERTER: ("powerRating", "maxVoltage", "type", "cost"),
    BATTERY: ("capacity", "powerOutput", "cost"),
}


def _num(x: Any, default: float = 0.0) -> float:
    try:
        if x is None:
            return float(default)
        return float(x)
    except (TypeError, ValueError):
        return float(default)


@dataclass(frozen=True)
class Dimensions:
    width: float                     # m
    height: float                    # m
    depth: Optional[float] = None
    weight: Optional[float] = None   # kg


@dataclass(frozen=True)
class Equipment:
    """Entrada de catálogo inmutable durante una sesión de diseño."""

    id: str
    manufacturer: str
    model: str
    specifications: Dict[str, Any] = field(default_factory=dict)
    dimensions: Dimensions = Dimensions(width=0.0, height=0.0)
    role: str = PANEL

    def spec(self, key: str, default: Any = None) -> Any:
        return self.specifications.get(key, default)

    def num(self, key: str, default: float = 0.0) -> float:
        return _num(self.specifications.get(key), default)

    # -------------------------
    # Panel
    # -------------------------
    @property
    def watts(self) -> float:
        return self.num("watts")

    @property
    def voltage(self) -> float:
        return self.num("voltage")

    @property
    def current(self) -> float:
        return self.num("current")

    @property
    def cost(self) -> float:
        return self.num("cost")

    # -------------------------
    # Inversor
    # -------------------------
    @property
    def power_rating(self) -> float:
        return self.num("powerRating")

    @property
    def max_voltage(self) -> float:
        return self.num("maxVoltage")

    @property
    def inverter_type(self) -> str:
        return str(self.spec("type", STRING_INVERTER))

    @property
    def is_microinverter(self) -> bool:
        return self.inverter_type == MICROINVERTER

    # -------------------------
    # Batería
    # -------------------------
    @property
    def capacity(self) -> float:
        return self.num("capacity")

    @property
    def power_output(self) -> float:
        return self.num("powerOutput")

    def as_dict(self) -> Dict[str, Any]:
        d = self.dimensions
        dims: Dict[str, Any] = {"width": d.width, "height": d.height}
        if d.depth is not None:
            dims["depth"] = d.depth
        if d.weight is not None:
            dims["weight"] = d.weight
        return {
            "id": self.id,
            "manufacturer": self.manufacturer,
            "model": self.model,
            "specifications": dict(self.specifications),
            "dimensions": dims,
        }
