# core/costos.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from electrical.catalogos.modelos import Equipment

DEFAULT_COST_PER_WATT = 2.8


@dataclass(frozen=True)
class CostParameters:
    """Costos de obra por panel y cargos fijos del proyecto (moneda)."""

    installation_per_panel: float = 200.0
    racking_per_panel: float = 100.0
    wiring_per_panel: float = 50.0
    monitoring: float = 500.0
    permit_and_design: float = 2500.0
    cost_per_watt: float = DEFAULT_COST_PER_WATT
    microinverter_per_panel: bool = False


@dataclass(frozen=True)
class CostBreakdown:
    panels: float
    inverter: float
    battery: float
    installation: float
    racking: float
    wiring: float
    monitoring: float
    permit_and_design: float

    @property
    def total(self) -> float:
        return (
            self.panels
            + self.inverter
            + self.battery
            + self.installation
            + self.racking
            + self.wiring
            + self.monitoring
            + self.permit_and_design
        )

    def as_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["total"] = self.total
        return d


def system_size_kw(panel_count: int, watts: float) -> float:
    return int(panel_count) * float(watts) / 1000.0


def installed_cost(
    panel_count: int,
    panel: Equipment,
    inverter: Optional[Equipment] = None,
    battery: Optional[Equipment] = None,
    params: Optional[CostParameters] = None,
) -> CostBreakdown:
    """
    Costo instalado = equipos + obra por panel + cargos fijos.

    El inversor entra una sola vez (también un microinversor), salvo que
    params.microinverter_per_panel pida un microinversor por panel.
    Monitoreo y permisos se cobran siempre, aun con 0 paneles.
    """
    p = params or CostParameters()
    n = int(panel_count)
    if n < 0:
        raise ValueError(f"panel_count no puede ser negativo ({n}).")

    inv_cost = 0.0
    if inverter is not None:
        unidades = n if (inverter.is_microinverter and p.microinverter_per_panel) else 1
        inv_cost = inverter.cost * unidades

    return CostBreakdown(
        panels=n * panel.cost,
        inverter=inv_cost,
        battery=battery.cost if battery is not None else 0.0,
        installation=n * p.installation_per_panel,
        racking=n * p.racking_per_panel,
        wiring=n * p.wiring_per_panel,
        monitoring=p.monitoring,
        permit_and_design=p.permit_and_design,
    )


def cost_per_watt_estimate(system_size_kw: float, cost_per_watt: float = DEFAULT_COST_PER_WATT) -> float:
    # estimación rápida de precio: kW × 1000 × $/W
    return float(system_size_kw) * 1000.0 * float(cost_per_watt)
