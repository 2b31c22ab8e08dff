import math
import unittest

from core.modelo import Footprint, GeoPoint
from electrical.catalogos import get_panel
from geometria.geodesia import offset_point, point_in_polygon
from geometria.layout import (
    LayoutConfig,
    calculate_optimal_layout,
    calculate_row_spacing,
    estimate_max_panels,
    grid_fill_placements,
    winter_solstice_elevation,
)


class TestLayout(unittest.TestCase):
    def setUp(self):
        self.panel = get_panel("rec400aa")
        self.sw = GeoPoint(30.0, -97.0)
        self.rect = Footprint.from_bounds(self.sw, offset_point(self.sw, east_m=20.0, north_m=10.0))

    def test_determinismo(self):
        a = calculate_optimal_layout(self.rect, self.panel, 20.0, 180.0)
        b = calculate_optimal_layout(self.rect, self.panel, 20.0, 180.0)
        self.assertEqual(a.total_panels, b.total_panels)
        self.assertEqual([p.position for p in a.positions], [p.position for p in b.positions])
        self.assertEqual([p.id for p in a.positions], [p.id for p in b.positions])

    def test_grilla_rectangular(self):
        res = calculate_optimal_layout(self.rect, self.panel, 20.0, 180.0)
        self.assertTrue(res.ok)
        self.assertGreater(res.total_panels, 0)
        self.assertEqual(res.total_panels, res.panels_per_row * res.number_of_rows)
        self.assertAlmostEqual(res.effective_panel_height, math.cos(math.radians(20.0)))

    def test_cobertura_acotada(self):
        for pitch in (0.0, 20.0, 45.0):
            res = calculate_optimal_layout(self.rect, self.panel, pitch, 180.0)
            self.assertGreaterEqual(res.coverage, 0.0)
            self.assertLessEqual(res.coverage, 1.0)
            plan = res.total_panels * self.panel.dimensions.width * res.effective_panel_height
            self.assertLessEqual(plan, res.footprint_area)

    def test_area_fisica_puede_superar_el_footprint(self):
        sw = GeoPoint(10.0, -84.0)
        fp = Footprint.from_bounds(sw, offset_point(sw, east_m=10.0, north_m=10.0))
        res = calculate_optimal_layout(fp, self.panel, 80.0, 180.0)
        fisica = res.total_panels * self.panel.dimensions.width * self.panel.dimensions.height
        self.assertAlmostEqual(fisica / res.footprint_area, res.panel_area_ratio)
        self.assertGreater(res.panel_area_ratio, 1.0)
        self.assertLessEqual(res.coverage, 1.0)

    def test_area_util_cero(self):
        cfg = LayoutConfig(edge_setback=6.0)
        res = calculate_optimal_layout(self.rect, self.panel, 20.0, 180.0, config=cfg)
        self.assertTrue(res.ok)
        self.assertEqual(0, res.total_panels)
        self.assertEqual([], res.positions)
        self.assertEqual(0.0, res.coverage)

    def test_pitch_cero_usa_espaciado_minimo(self):
        self.assertEqual(0.4, calculate_row_spacing(1.0, 0.0, 30.0))
        cfg = LayoutConfig(row_spacing=0.75)
        self.assertEqual(0.75, calculate_row_spacing(1.0, 0.0, 30.0, cfg))

    def test_elevacion_sobre_90_usa_espaciado_minimo(self):
        # lat −10: 90 + 10 + 23.45 > 90
        self.assertEqual(0.4, calculate_row_spacing(1.0, 20.0, -10.0))

    def test_espaciado_por_sombra_con_config_por_defecto(self):
        # sombra × 1.1 aunque quede por debajo de row_spacing
        esperado = 1.0 * math.sin(math.radians(20.0)) / math.tan(math.radians(83.45)) * 1.1
        self.assertAlmostEqual(esperado, calculate_row_spacing(1.0, 20.0, 30.0))
        self.assertLess(esperado, LayoutConfig().row_spacing)

    def test_filas_con_espaciado_por_sombra(self):
        res = calculate_optimal_layout(self.rect, self.panel, 20.0, 180.0)
        self.assertAlmostEqual(0.0432, res.row_spacing, places=4)
        self.assertEqual(9, res.number_of_rows)
        self.assertEqual(11, res.panels_per_row)
        self.assertEqual(99, res.total_panels)

    def test_espaciado_por_sombra_de_invierno(self):
        self.assertAlmostEqual(73.45, winter_solstice_elevation(40.0))
        cfg = LayoutConfig(row_spacing=0.0)
        esperado = 1.0 * math.sin(math.radians(30.0)) / math.tan(math.radians(73.45)) * 1.1
        self.assertAlmostEqual(esperado, calculate_row_spacing(1.0, 30.0, 40.0, cfg))

    def test_override_de_espaciado(self):
        cfg = LayoutConfig(row_spacing_override=1.25)
        self.assertEqual(1.25, calculate_row_spacing(1.0, 30.0, 40.0, cfg))

    def test_poligono_solo_paneles_dentro(self):
        tri = Footprint.from_ring([
            self.sw,
            offset_point(self.sw, east_m=30.0, north_m=0.0),
            offset_point(self.sw, east_m=0.0, north_m=30.0),
        ])
        res = calculate_optimal_layout(tri, self.panel, 0.0, 180.0)
        self.assertGreater(res.total_panels, 0)
        ring = tri.ring()
        for p in res.positions:
            self.assertTrue(point_in_polygon(p.position, ring))

    def test_grilla_rotada_queda_dentro(self):
        res = calculate_optimal_layout(self.rect, self.panel, 20.0, 200.0)
        self.assertAlmostEqual(20.0, res.meta["grid_rotation"])
        ring = self.rect.ring()
        for p in res.positions:
            self.assertAlmostEqual(20.0, p.rotation)
            self.assertTrue(point_in_polygon(p.position, ring))

    def test_filas_cortas_descartadas(self):
        cfg = LayoutConfig(min_row_length=100)
        res = calculate_optimal_layout(self.rect, self.panel, 20.0, 180.0, config=cfg)
        self.assertEqual(0, res.total_panels)

    def test_estimacion_rapida_48_paneles(self):
        self.assertEqual(48, estimate_max_panels(100.0, 1.7, 1.0))
        self.assertEqual(0, estimate_max_panels(0.0, 1.7, 1.0))

    def test_relleno_manual_dentro_del_techo(self):
        placements = grid_fill_placements(self.rect, self.panel)
        self.assertGreater(len(placements), 0)
        ring = self.rect.ring()
        self.assertTrue(all(point_in_polygon(p.position, ring) for p in placements))


if __name__ == "__main__":
    unittest.main()
