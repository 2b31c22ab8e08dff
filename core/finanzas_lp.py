# core/finanzas_lp.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from .errores import InvalidFinancialInputError
from .modelo import SavingsResult, YearlyProjection

LIFETIME_YEARS = 25
PROPERTY_VALUE_PER_KW = 3000.0
CO2_LBS_PER_KWH = 0.709


@dataclass(frozen=True)
class FinancialAssumptions:
    loan_term_years: int = 25
    apr_pct: float = 5.99
    federal_tax_credit: float = 0.30
    horizon_years: int = 25
    degradation_pct: float = 0.5        # % anual de pérdida de producción
    escalation_pct: float = 5.0         # % anual de alza de tarifa
    default_rate: float = 0.15          # $/kWh sin datos de factura
    discount_rate: float = 0.06         # solo para VPN / TIR


# ==========================================================
# Utilidades matemáticas base
# ==========================================================

def monthly_loan_payment(principal: float, years: int, apr_pct: float) -> float:
    """Cuota de préstamo amortizable: P·r·(1+r)^n / ((1+r)^n − 1)."""
    n = int(years) * 12
    if n <= 0:
        raise InvalidFinancialInputError(f"Plazo del préstamo inválido ({years} años).")
    r = float(apr_pct) / 12.0 / 100.0
    if r == 0:
        return float(principal) / n
    f = (1.0 + r) ** n
    return float(principal) * r * f / (f - 1.0)


def _npv(rate: float, cashflows: List[float]) -> float:
    return sum(cf / ((1.0 + rate) ** t) for t, cf in enumerate(cashflows))


def _irr_bisection(cashflows: List[float]) -> Optional[float]:
    low, high = -0.9, 2.0
    f_low = _npv(low, cashflows)
    f_high = _npv(high, cashflows)

    if f_low * f_high > 0:
        return None

    for _ in range(300):
        mid = (low + high) / 2
        f_mid = _npv(mid, cashflows)
        if abs(f_mid) < 1e-7:
            return mid
        if f_low * f_mid > 0:
            low, f_low = mid, f_mid
        else:
            high, f_high = mid, f_mid

    return (low + high) / 2


# ==========================================================
# Validación de entradas
# ==========================================================

def _validar_entradas(
    installed_cost: float,
    annual_production_kwh: float,
    monthly_usage_kwh: Optional[float],
    monthly_bill: Optional[float],
    a: FinancialAssumptions,
) -> None:
    if installed_cost <= 0:
        raise InvalidFinancialInputError(f"Costo instalado debe ser > 0 ({installed_cost}).")
    if annual_production_kwh < 0:
        raise InvalidFinancialInputError(f"Producción anual no puede ser negativa ({annual_production_kwh}).")
    if monthly_usage_kwh is not None and monthly_usage_kwh <= 0:
        raise InvalidFinancialInputError(f"Consumo mensual debe ser > 0 ({monthly_usage_kwh}).")
    if monthly_bill is not None and monthly_bill <= 0:
        raise InvalidFinancialInputError(f"Factura mensual debe ser > 0 ({monthly_bill}).")
    if a.loan_term_years <= 0:
        raise InvalidFinancialInputError(f"Plazo del préstamo debe ser > 0 ({a.loan_term_years}).")
    if a.horizon_years <= 0:
        raise InvalidFinancialInputError(f"Horizonte debe ser > 0 ({a.horizon_years}).")
    if not 0.0 <= a.federal_tax_credit < 1.0:
        raise InvalidFinancialInputError(f"Crédito fiscal fuera de [0, 1): {a.federal_tax_credit}.")
    if a.default_rate <= 0:
        raise InvalidFinancialInputError(f"Tarifa por defecto debe ser > 0 ({a.default_rate}).")


# ==========================================================
# Proyección de ahorro (recurrencia año a año)
# ==========================================================

def simulate_savings(
    system_size_kw: float,
    installed_cost: float,
    annual_production_kwh: float,
    monthly_usage_kwh: Optional[float] = None,
    monthly_bill: Optional[float] = None,
    assumptions: Optional[FinancialAssumptions] = None,
) -> SavingsResult:
    """
    Simulación de ahorro a `horizon_years` años.

    Recurrencia estricta: la tarifa escala y la producción se degrada en
    forma multiplicativa al final de cada año. El payback se fija en el
    primer año en que el ahorro acumulado supera el costo instalado y no
    se vuelve a evaluar. system_size_kw es solo informativo.
    """
    a = assumptions or FinancialAssumptions()
    _validar_entradas(installed_cost, annual_production_kwh, monthly_usage_kwh, monthly_bill, a)

    if monthly_usage_kwh is not None and monthly_bill is not None:
        current_rate = float(monthly_bill) / float(monthly_usage_kwh)
    else:
        current_rate = float(a.default_rate)

    if monthly_usage_kwh is not None:
        annual_usage = float(monthly_usage_kwh) * 12.0
    else:
        annual_usage = float(annual_production_kwh)

    loan_amount = float(installed_cost) * (1.0 - a.federal_tax_credit)
    monthly_payment = monthly_loan_payment(loan_amount, a.loan_term_years, a.apr_pct)
    annual_loan_payment = monthly_payment * 12.0

    first_rate = current_rate
    production = float(annual_production_kwh)
    cumulative = 0.0
    payback = 0
    yearly: List[YearlyProjection] = []

    for year in range(1, int(a.horizon_years) + 1):
        traditional_bill = annual_usage * current_rate
        solar_cost = annual_loan_payment if year <= a.loan_term_years else 0.0
        solar_savings = production * current_rate
        annual_savings = solar_savings - solar_cost
        cumulative += annual_savings

        if payback == 0 and cumulative > installed_cost:
            payback = year

        yearly.append(
            YearlyProjection(
                year=year,
                traditional_bill=traditional_bill,
                solar_cost=solar_cost,
                annual_savings=annual_savings,
                cumulative_savings=cumulative,
                electricity_rate=current_rate,
                production_kwh=production,
            )
        )

        production *= 1.0 - a.degradation_pct / 100.0
        current_rate *= 1.0 + a.escalation_pct / 100.0

    roi = cumulative / float(installed_cost) * 100.0
    offset = min(float(annual_production_kwh) / annual_usage * 100.0, 100.0) if annual_usage > 0 else 0.0

    return SavingsResult(
        yearly=yearly,
        first_year_savings=yearly[0].annual_savings,
        monthly_payment=monthly_payment,
        payback_period=payback,
        roi=roi,
        current_rate=first_rate,
        offset_percentage=offset,
        loan_amount=loan_amount,
        annual_usage_kwh=annual_usage,
    )


def investment_indicators(
    installed_cost: float,
    savings: SavingsResult,
    discount_rate: float = 0.06,
) -> Dict[str, Any]:
    """
    VPN y TIR en base de compra de contado: inversión inicial contra el valor
    de la energía producida cada año (sin cuota de préstamo).
    """
    cashflows = [-float(installed_cost)]
    cashflows += [y.production_kwh * y.electricity_rate for y in savings.yearly]
    return {
        "cashflows": cashflows,
        "npv": _npv(discount_rate, cashflows),
        "irr": _irr_bisection(cashflows),
        "discount_rate": float(discount_rate),
    }


# ==========================================================
# Vista rápida y beneficios (pantalla de resultados)
# ==========================================================

def simple_financials(
    system_cost: float,
    annual_production: float,
    electricity_rate: float,
    incentives: Optional[Mapping[str, float]] = None,
) -> Dict[str, float]:
    """
    federal: monto absoluto (por defecto 30 % del costo); state / utility: montos absolutos.
    """
    if system_cost <= 0:
        raise InvalidFinancialInputError(f"Costo del sistema debe ser > 0 ({system_cost}).")
    if electricity_rate <= 0:
        raise InvalidFinancialInputError(f"Tarifa debe ser > 0 ({electricity_rate}).")

    inc = dict(incentives or {})
    federal = float(inc.get("federal", system_cost * 0.30))
    state = float(inc.get("state", 0.0))
    utility = float(inc.get("utility", 0.0))

    net_cost = float(system_cost) - federal - state - utility
    if net_cost <= 0:
        raise InvalidFinancialInputError(f"Incentivos superan el costo del sistema (neto={net_cost:.2f}).")

    annual_savings = float(annual_production) * float(electricity_rate)
    payback = net_cost / annual_savings if annual_savings > 0 else float("inf")
    lifetime = annual_savings * LIFETIME_YEARS

    return {
        "system_cost": float(system_cost),
        "federal_incentive": federal,
        "state_incentive": state,
        "utility_incentive": utility,
        "net_cost": net_cost,
        "annual_savings": annual_savings,
        "payback_years": payback,
        "lifetime_savings": lifetime,
        "roi": (lifetime - net_cost) / net_cost * 100.0,
    }


def benefits_summary(estimated_cost: float, system_size_kw: float, annual_production: float) -> Dict[str, float]:
    return {
        "tax_credit": float(estimated_cost) * 0.30,
        "property_value_increase": float(system_size_kw) * PROPERTY_VALUE_PER_KW,
        "co2_reduction_lbs": float(annual_production) * CO2_LBS_PER_KWH,
    }
