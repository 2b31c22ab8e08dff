import unittest

from core.errores import ProductionServiceError
from electrical.energia.contrato import ProductionResponse
from electrical.energia.produccion import estimate_production, flat_production_estimate


class _ServicioFijo:
    def __init__(self, annual=10000.0):
        self.annual = annual
        self.requests = []

    def calculate_production(self, request):
        self.requests.append(request)
        return ProductionResponse(annual_kwh=self.annual, monthly_kwh=[self.annual / 12.0] * 12)


class _ServicioCaido:
    def calculate_production(self, request):
        raise ProductionServiceError("NREL API error: 500", status_code=500)


class TestProduccion(unittest.TestCase):
    def test_estimacion_por_servicio(self):
        servicio = _ServicioFijo(10000.0)
        est = estimate_production(servicio, 8.0, 30.0, -97.0, 20.0, 180.0)
        self.assertEqual("service", est.source)
        self.assertEqual(10000.0, est.annual_kwh)
        self.assertAlmostEqual(10000.0 / (8.0 * 8760.0), est.performance_ratio)
        self.assertAlmostEqual(14.08, est.losses_pct)

        req = servicio.requests[0]
        self.assertEqual(8.0, req.system_capacity_kw)
        self.assertEqual(180.0, req.azimuth_deg)
        self.assertEqual(20.0, req.tilt_deg)

    def test_perdidas_propias(self):
        servicio = _ServicioFijo()
        estimate_production(servicio, 8.0, 30.0, -97.0, 20.0, 180.0, losses={"shading": 0.0})
        self.assertAlmostEqual(11.08, servicio.requests[0].total_loss_pct)

    def test_fallo_se_propaga(self):
        with self.assertRaises(ProductionServiceError):
            estimate_production(_ServicioCaido(), 8.0, 30.0, -97.0, 20.0, 180.0)

    def test_modo_plano(self):
        est = flat_production_estimate(19.2)
        self.assertAlmostEqual(31536.0, est.annual_kwh)
        self.assertEqual(12, len(est.monthly_kwh))
        self.assertAlmostEqual(est.annual_kwh, sum(est.monthly_kwh))
        self.assertAlmostEqual(31536.0 * 31 / 365.0, est.monthly_kwh[0])
        self.assertEqual("flat", est.source)


if __name__ == "__main__":
    unittest.main()
