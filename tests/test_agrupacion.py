import unittest

from core.modelo import GeoPoint, PanelPlacement
from electrical.catalogos import get_inverter, get_panel
from geometria.agrupacion import group_into_strings, strings_summary
from geometria.geodesia import offset_point


class TestAgrupacion(unittest.TestCase):
    def setUp(self):
        self.panel = get_panel("rec400aa")
        o = GeoPoint(14.0, -87.0)
        self.a = PanelPlacement("a", o, 0.0, self.panel)
        self.b = PanelPlacement("b", offset_point(o, east_m=0.9, north_m=0.0), 0.0, self.panel)
        self.c = PanelPlacement("c", offset_point(o, east_m=1.8, north_m=0.0), 0.0, self.panel)

    def test_cadena_en_orden(self):
        strings = group_into_strings([self.a, self.b, self.c])
        self.assertEqual(1, len(strings))
        self.assertEqual(["a", "b", "c"], [p.id for p in strings[0].panels])

    def test_depende_del_orden(self):
        strings = group_into_strings([self.a, self.c, self.b])
        self.assertEqual(2, len(strings))
        self.assertEqual(["a", "b"], [p.id for p in strings[0].panels])
        self.assertEqual(["c"], [p.id for p in strings[1].panels])

    def test_rotacion_distinta_no_agrupa(self):
        b_rot = PanelPlacement("b", self.b.position, 10.0, self.panel)
        self.assertEqual(2, len(group_into_strings([self.a, b_rot])))

    def test_rotacion_sin_envolver(self):
        a = PanelPlacement("a", self.a.position, 359.0, self.panel)
        b = PanelPlacement("b", self.b.position, 1.0, self.panel)
        self.assertEqual(2, len(group_into_strings([a, b])))

    def test_rotacion_negativa_sin_normalizar(self):
        a = PanelPlacement("a", self.a.position, -2.0, self.panel)
        b = PanelPlacement("b", self.b.position, 2.0, self.panel)
        self.assertEqual(-2.0, a.rotation)
        self.assertEqual(1, len(group_into_strings([a, b])))

    def test_vacio(self):
        self.assertEqual([], group_into_strings([]))

    def test_resumen(self):
        inv = get_inverter("se7600h")
        strings = group_into_strings([self.a, self.b, self.c], inv)
        resumen = strings_summary(strings)
        self.assertEqual("string-1", resumen[0]["id"])
        self.assertEqual(3, resumen[0]["n_panels"])
        self.assertAlmostEqual(1.2, resumen[0]["kw"])
        self.assertEqual(inv.model, resumen[0]["inverter"])


if __name__ == "__main__":
    unittest.main()
