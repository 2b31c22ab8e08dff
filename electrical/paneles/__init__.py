# Paneles FV: validación de strings, filtros de compatibilidad y orquestación desde el layout.
from __future__ import annotations

from .calculo_de_strings import (
    assert_compatible,
    check_inverter_pairing,
    max_panels_per_string,
    min_panels_for_power,
    validate_string_configuration,
)
from .compatibilidad import compatible_batteries, compatible_inverters
from .orquestador_paneles import strings_from_layout, validate_layout

__all__ = [
    # Motor de strings
    "validate_string_configuration",
    "check_inverter_pairing",
    "max_panels_per_string",
    "min_panels_for_power",
    "assert_compatible",
    # Orquestación
    "validate_layout",
    "strings_from_layout",
    # Selector de equipos
    "compatible_inverters",
    "compatible_batteries",
]
