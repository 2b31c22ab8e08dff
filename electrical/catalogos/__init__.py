# API pública del dominio catalogos

from .modelos import (
    BATTERY,
    INVERTER,
    MICROINVERTER,
    PANEL,
    STRING_INVERTER,
    Dimensions,
    Equipment,
)

from .catalogos import (
    equipment_catalog,
    get_battery,
    get_inverter,
    get_panel,
)

from .catalogos_yaml import load_equipment_yaml, equipment_from_dict

__all__ = [
    # modelos
    "Dimensions",
    "Equipment",
    "PANEL",
    "INVERTER",
    "BATTERY",
    "STRING_INVERTER",
    "MICROINVERTER",

    # funciones catálogo
    "get_panel",
    "get_inverter",
    "get_battery",
    "equipment_catalog",
    "load_equipment_yaml",
    "equipment_from_dict",
]
