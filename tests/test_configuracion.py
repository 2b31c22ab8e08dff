import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from core.configuracion import (
    cost_parameters_from,
    effective_configuration,
    financial_assumptions_from,
    layout_config_from,
    load_configuration,
    production_client_from,
)
from core.costos import CostParameters
from core.finanzas_lp import FinancialAssumptions
from geometria.layout import LayoutConfig


class TestConfiguracion(unittest.TestCase):
    def test_config_empaquetada_coincide_con_defaults(self):
        cfg = load_configuration()
        self.assertEqual(LayoutConfig(), layout_config_from(cfg))
        self.assertEqual(CostParameters(), cost_parameters_from(cfg))
        self.assertEqual(FinancialAssumptions(), financial_assumptions_from(cfg))
        self.assertAlmostEqual(14.08, sum(cfg.section("losses").values()))

    def test_overrides_por_seccion(self):
        base = load_configuration()
        cfg = effective_configuration(base, {
            "technical": {"layout": {"edge_setback": 1.0}},
            "financial": {"apr_pct": 3.5},
        })
        lc = layout_config_from(cfg)
        self.assertEqual(1.0, lc.edge_setback)
        self.assertEqual(0.025, lc.panel_spacing)
        self.assertEqual(3.5, financial_assumptions_from(cfg).apr_pct)
        # la base no se toca
        self.assertEqual(0.5, layout_config_from(base).edge_setback)

    def test_sin_overrides_devuelve_base(self):
        base = load_configuration()
        self.assertIs(base, effective_configuration(base, None))

    def test_clave_desconocida(self):
        cfg = effective_configuration(load_configuration(), {"technical": {"layout": {"margen": 1.0}}})
        with self.assertRaises(ValueError):
            layout_config_from(cfg)

    def test_directorio_sin_archivos(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                load_configuration(Path(tmp))

    def test_yaml_que_no_es_dict(self):
        with tempfile.TemporaryDirectory() as tmp:
            Path(tmp, "technical.yaml").write_text("- a\n- b\n", encoding="utf-8")
            Path(tmp, "financial.yaml").write_text("apr_pct: 1\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_configuration(Path(tmp))

    def test_cliente_nrel_con_timeout_de_config(self):
        cfg = effective_configuration(load_configuration(), {"technical": {"production": {"timeout_s": 12}}})
        session = mock.Mock()
        client = production_client_from(cfg, api_key="k", session=session)
        self.assertEqual(12.0, client.timeout)
        self.assertIs(session, client.session)
        self.assertEqual(30.0, production_client_from(load_configuration(), api_key="k", session=session).timeout)

    def test_cliente_nrel_toma_clave_del_entorno(self):
        with mock.patch.dict(os.environ, {"NREL_API_KEY": "abc"}):
            client = production_client_from(load_configuration(), session=mock.Mock())
        self.assertEqual("abc", client.api_key)


if __name__ == "__main__":
    unittest.main()
