# reportes/generar_layout_paneles.py
# Vista superior del techo con los paneles del layout (metros locales desde la esquina SW).
from __future__ import annotations

import math
from pathlib import Path
from typing import List, Tuple, Union

import matplotlib.pyplot as plt
from matplotlib.patches import Polygon

from core.modelo import Footprint, PanelPlacement
from geometria.geodesia import bounds, local_meters, offset_point
from geometria.layout import LayoutResult


def _esquinas_panel(
    p: PanelPlacement,
    w_m: float,
    h_m: float,
) -> List[Tuple[float, float]]:
    # (este, norte) relativos a la esquina NW del panel, rotados como la grilla
    a = math.radians(p.rotation)
    out = []
    for dx, dy in ((0.0, 0.0), (w_m, 0.0), (w_m, h_m), (0.0, h_m)):
        south = dy * math.cos(a) - dx * math.sin(a)
        east = dy * math.sin(a) + dx * math.cos(a)
        out.append((east, -south))
    return out


def plot_layout(
    footprint: Footprint,
    layout: LayoutResult,
    out_path: Union[str, Path],
    *,
    titulo: str = "Arreglo FV (vista superior)",
    numerar: bool = True,
) -> Path:
    ring = footprint.ring()
    origin, _ = bounds(ring)

    fig = plt.figure(figsize=(8.0, 6.0), dpi=150)
    ax = fig.add_subplot(111)
    ax.set_title(titulo)
    ax.set_aspect("equal")

    # Techo
    techo = [local_meters(origin, v) for v in ring]
    ax.add_patch(Polygon(techo, closed=True, linewidth=1.2, edgecolor="#98A2B3", facecolor="#F2F4F7"))

    panel = layout.positions[0].panel if layout.positions else None
    w_m = float(panel.dimensions.width) if panel is not None else 0.0
    h_m = float(layout.effective_panel_height)

    for k, p in enumerate(layout.positions, start=1):
        pts = [
            local_meters(origin, offset_point(p.position, east_m=e, north_m=n))
            for e, n in _esquinas_panel(p, w_m, h_m)
        ]
        ax.add_patch(Polygon(pts, closed=True, linewidth=0.8, edgecolor="#0B2E4A", facecolor="#1F2A37"))
        if numerar:
            cx = sum(x for x, _ in pts) / 4.0
            cy = sum(y for _, y in pts) / 4.0
            ax.text(cx, cy, str(k), ha="center", va="center", fontsize=6, color="white")

    xs = [x for x, _ in techo]
    ys = [y for _, y in techo]
    span = max(max(xs) - min(xs), max(ys) - min(ys), 1.0)
    ax.set_xlim(min(xs) - 0.05 * span, max(xs) + 0.15 * span)
    ax.set_ylim(min(ys) - 0.05 * span, max(ys) + 0.15 * span)

    # Flecha norte
    nx = max(xs) + 0.08 * span
    ny = max(ys)
    ax.annotate(
        "N",
        xy=(nx, ny + 0.1 * span),
        xytext=(nx, ny),
        ha="center",
        arrowprops=dict(arrowstyle="->", color="#344054"),
    )

    ax.set_xlabel("Este (m)")
    ax.set_ylabel("Norte (m)")
    ax.text(
        0.01, 0.01,
        f"{layout.total_panels} paneles · cobertura {layout.coverage:.0%}",
        transform=ax.transAxes, fontsize=8, color="#344054",
    )

    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(out)
    plt.close(fig)
    return out
