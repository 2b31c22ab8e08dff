# reportes/generar_charts.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import matplotlib.pyplot as plt

from core.modelo import SavingsResult


def _mkdir_charts(out_dir: Optional[str]) -> Path:
    # Default estable: salidas/charts
    base = Path(out_dir) if out_dir else Path("salidas") / "charts"
    base.mkdir(parents=True, exist_ok=True)
    return base


def _plot_acumulado(anios: List[int], acumulado: List[float], costo: Optional[float], out_path: Path) -> None:
    plt.figure()
    plt.plot(anios, acumulado, marker="o", label="Ahorro acumulado")
    if costo is not None:
        plt.axhline(costo, linestyle="--", color="#B42318", label="Costo instalado")
    plt.axhline(0.0, color="#98A2B3", linewidth=0.8)
    plt.xlabel("Año")
    plt.legend()
    plt.tight_layout()
    plt.savefig(out_path, dpi=160)
    plt.close()


def _plot_factura_vs_solar(anios: List[int], factura: List[float], solar: List[float], out_path: Path) -> None:
    plt.figure()
    ancho = 0.4
    plt.bar([a - ancho / 2 for a in anios], factura, width=ancho, label="Factura tradicional")
    plt.bar([a + ancho / 2 for a in anios], solar, width=ancho, label="Costo solar (préstamo)")
    plt.xlabel("Año")
    plt.legend()
    plt.tight_layout()
    plt.savefig(out_path, dpi=160)
    plt.close()


def generate_savings_charts(
    savings: SavingsResult,
    out_dir: Optional[str] = None,
    installed_cost: Optional[float] = None,
) -> Dict[str, str]:
    """
    Genera 2 PNG:
      - solar_chart_acumulado.png (ahorro acumulado vs costo)
      - solar_chart_factura.png (factura tradicional vs costo solar por año)
    """
    if not savings.yearly:
        return {}

    base = _mkdir_charts(out_dir)
    anios = [y.year for y in savings.yearly]

    p_acum = base / "solar_chart_acumulado.png"
    p_fact = base / "solar_chart_factura.png"

    _plot_acumulado(anios, [y.cumulative_savings for y in savings.yearly], installed_cost, p_acum)
    _plot_factura_vs_solar(
        anios,
        [y.traditional_bill for y in savings.yearly],
        [y.solar_cost for y in savings.yearly],
        p_fact,
    )

    return {"acumulado": str(p_acum), "factura": str(p_fact)}
