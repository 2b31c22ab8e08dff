import tempfile
import unittest
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

from core.finanzas_lp import simulate_savings  # noqa: E402
from core.modelo import Footprint, GeoPoint, SavingsResult  # noqa: E402
from electrical.catalogos import get_panel  # noqa: E402
from geometria.geodesia import offset_point  # noqa: E402
from geometria.layout import calculate_optimal_layout  # noqa: E402
from reportes.generar_charts import generate_savings_charts  # noqa: E402
from reportes.generar_layout_paneles import plot_layout  # noqa: E402


class TestReportes(unittest.TestCase):
    def test_plot_layout(self):
        sw = GeoPoint(30.0, -97.0)
        fp = Footprint.from_bounds(sw, offset_point(sw, east_m=12.0, north_m=8.0))
        layout = calculate_optimal_layout(fp, get_panel("rec400aa"), 20.0, 200.0)
        with tempfile.TemporaryDirectory() as tmp:
            out = plot_layout(fp, layout, Path(tmp) / "sub" / "layout.png")
            self.assertTrue(out.exists())
            self.assertGreater(out.stat().st_size, 0)

    def test_plot_layout_sin_paneles(self):
        sw = GeoPoint(30.0, -97.0)
        fp = Footprint.from_bounds(sw, offset_point(sw, east_m=1.0, north_m=1.0))
        layout = calculate_optimal_layout(fp, get_panel("rec400aa"), 20.0, 180.0)
        with tempfile.TemporaryDirectory() as tmp:
            self.assertTrue(plot_layout(fp, layout, Path(tmp) / "vacio.png").exists())

    def test_charts_de_ahorro(self):
        savings = simulate_savings(19.2, 53760.0, 31536.0, monthly_usage_kwh=1000.0, monthly_bill=150.0)
        with tempfile.TemporaryDirectory() as tmp:
            paths = generate_savings_charts(savings, tmp, installed_cost=53760.0)
            self.assertEqual({"acumulado", "factura"}, set(paths))
            for p in paths.values():
                self.assertTrue(Path(p).exists())

    def test_charts_sin_datos(self):
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual({}, generate_savings_charts(SavingsResult(), tmp))


if __name__ == "__main__":
    unittest.main()
