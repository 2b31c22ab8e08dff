import unittest

from core.errores import EquipmentIncompatibilityError
from electrical.catalogos import Dimensions, Equipment, INVERTER, get_inverter, get_panel
from electrical.paneles.calculo_de_strings import (
    assert_compatible,
    check_inverter_pairing,
    max_panels_per_string,
    min_panels_for_power,
    validate_string_configuration,
)


def _inversor_string(max_v: float, power_w: float) -> Equipment:
    return Equipment(
        id=f"inv_{int(max_v)}_{int(power_w)}",
        manufacturer="Test",
        model="String",
        specifications={"powerRating": power_w, "maxVoltage": max_v, "type": "String", "cost": 1000},
        dimensions=Dimensions(0.5, 0.3),
        role=INVERTER,
    )


class TestStrings(unittest.TestCase):
    def setUp(self):
        self.panel = get_panel("rec400aa")

    def test_escenario_480v_7600w_invalido(self):
        inv = get_inverter("se7600h")
        self.assertEqual(11, max_panels_per_string(inv, self.panel))
        self.assertEqual(19, min_panels_for_power(inv, self.panel))
        self.assertFalse(check_inverter_pairing(inv, self.panel)["is_valid"])

        res = validate_string_configuration(20, self.panel, inv)
        self.assertFalse(res["is_valid"])
        self.assertFalse(res["ok"])
        self.assertEqual("equipment_incompatible", res["codigo"])
        self.assertTrue(res["errores"])

    def test_resultado_no_fatal_y_assert_opcional(self):
        res = validate_string_configuration(20, self.panel, get_inverter("se7600h"))
        with self.assertRaises(EquipmentIncompatibilityError):
            assert_compatible(res)

    def test_configuracion_valida(self):
        inv = _inversor_string(600, 3000)
        res = validate_string_configuration(20, self.panel, inv)
        self.assertTrue(res["is_valid"])
        self.assertEqual(14, res["max_panels_per_string"])
        self.assertEqual(8, res["min_panels_for_power"])
        sc = res["suggested_configuration"]
        self.assertEqual(2, sc["strings_count"])
        self.assertEqual(10, sc["panels_per_string"])
        self.assertEqual(0, sc["unused_panels"])
        ep = res["electrical_parameters"]
        self.assertAlmostEqual(405.0, ep["string_voltage"])
        self.assertAlmostEqual(9.9, ep["string_current"])
        self.assertAlmostEqual(8000.0, ep["total_power"])
        self.assertEqual(2, len(res["strings"]))
        self.assertIs(assert_compatible(res), res)

    def test_paneles_sobrantes_reportados(self):
        res = validate_string_configuration(23, self.panel, _inversor_string(600, 3000))
        self.assertTrue(res["is_valid"])
        self.assertEqual(11, res["suggested_configuration"]["panels_per_string"])
        self.assertEqual(1, res["suggested_configuration"]["unused_panels"])
        self.assertTrue(res["warnings"])

    def test_string_corto_invalido(self):
        res = validate_string_configuration(5, self.panel, _inversor_string(600, 3000))
        self.assertFalse(res["is_valid"])
        self.assertEqual(5, res["suggested_configuration"]["panels_per_string"])

    def test_monotonia_en_vmax(self):
        anterior = False
        for max_v in range(40, 1200, 20):
            actual = check_inverter_pairing(_inversor_string(max_v, 3000), self.panel)["is_valid"]
            if anterior:
                self.assertTrue(actual, f"is_valid volvió a False con Vmax={max_v}")
            anterior = actual
        self.assertTrue(anterior)

    def test_microinversor_siempre_valido(self):
        inv = get_inverter("iq8plus")
        res = validate_string_configuration(12, self.panel, inv)
        self.assertTrue(res["is_valid"])
        self.assertEqual("Microinverter", res["topologia"])
        self.assertEqual(12, res["suggested_configuration"]["strings_count"])
        self.assertEqual(1, res["suggested_configuration"]["panels_per_string"])
        self.assertAlmostEqual(self.panel.voltage, res["electrical_parameters"]["string_voltage"])
        self.assertAlmostEqual(self.panel.current, res["electrical_parameters"]["string_current"])
        # 290 W < 90 % de 400 W
        self.assertTrue(res["warnings"])

    def test_voltaje_de_panel_excede_inversor(self):
        res = validate_string_configuration(8, self.panel, _inversor_string(30, 3000))
        self.assertFalse(res["is_valid"])
        self.assertEqual(8, res["suggested_configuration"]["unused_panels"])

    def test_total_panels_invalido(self):
        res = validate_string_configuration(0, self.panel, get_inverter("se7600h"))
        self.assertFalse(res["ok"])


if __name__ == "__main__":
    unittest.main()
