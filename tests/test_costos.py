import unittest

from core.costos import CostParameters, cost_per_watt_estimate, installed_cost, system_size_kw
from electrical.catalogos import get_battery, get_inverter, get_panel


class TestCostos(unittest.TestCase):
    def setUp(self):
        self.panel = get_panel("rec400aa")

    def test_tamano_del_sistema(self):
        self.assertAlmostEqual(19.2, system_size_kw(48, 400))
        self.assertEqual(0.0, system_size_kw(0, 400))

    def test_costo_con_inversor_string(self):
        c = installed_cost(10, self.panel, get_inverter("se7600h"))
        self.assertAlmostEqual(4000.0, c.panels)
        self.assertAlmostEqual(1800.0, c.inverter)
        self.assertAlmostEqual(2000.0, c.installation)
        self.assertAlmostEqual(1000.0, c.racking)
        self.assertAlmostEqual(500.0, c.wiring)
        self.assertAlmostEqual(12300.0, c.total)
        self.assertAlmostEqual(12300.0, c.as_dict()["total"])

    def test_microinversor_se_suma_una_vez(self):
        c = installed_cost(10, self.panel, get_inverter("iq8plus"))
        self.assertAlmostEqual(215.0, c.inverter)

    def test_microinversor_por_panel_opcional(self):
        params = CostParameters(microinverter_per_panel=True)
        self.assertAlmostEqual(2150.0, installed_cost(10, self.panel, get_inverter("iq8plus"), params=params).inverter)
        # no aplica a inversores string
        self.assertAlmostEqual(1800.0, installed_cost(10, self.panel, get_inverter("se7600h"), params=params).inverter)

    def test_bateria_suma(self):
        sin = installed_cost(10, self.panel)
        con = installed_cost(10, self.panel, battery=get_battery("pw2"))
        self.assertAlmostEqual(8500.0, con.total - sin.total)

    def test_parametros_propios(self):
        params = CostParameters(installation_per_panel=0, racking_per_panel=0, wiring_per_panel=0,
                                monitoring=0, permit_and_design=0)
        self.assertAlmostEqual(4000.0, installed_cost(10, self.panel, params=params).total)

    def test_sin_paneles_mantiene_cargos_fijos(self):
        c = installed_cost(0, self.panel, get_inverter("se7600h"))
        self.assertAlmostEqual(0.0, c.panels)
        self.assertAlmostEqual(0.0, c.installation)
        self.assertAlmostEqual(4800.0, c.total)
        self.assertAlmostEqual(3000.0, installed_cost(0, self.panel).total)
        with self.assertRaises(ValueError):
            installed_cost(-1, self.panel)

    def test_precio_por_watt(self):
        self.assertAlmostEqual(53760.0, cost_per_watt_estimate(19.2))
        self.assertAlmostEqual(30000.0, cost_per_watt_estimate(10.0, 3.0))


if __name__ == "__main__":
    unittest.main()
