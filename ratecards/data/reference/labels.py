"""
Display Labels

Console labels (es-ES) for charge codes. Codes without a label are shown as-is.
"""

CHARGE_TYPE_LABELS = {
    "BASE": "Base",
    "FREIGHT": "Flete",
    "DISTANCE": "Distancia",
    "FUEL": "Combustible",
    "HYBRID": "Híbrido",
}

RATE_BASIS_LABELS = {
    "FLAT": "Fijo",
    "PER_WEIGHT": "Por Tonelada",
    "PER_DISTANCE": "Por Kilómetro",
    "PERCENTAGE": "Porcentaje",
}

WEIGHT_SOURCE_LABELS = {
    "ACTUAL": "Peso transportado",
    "TRUCK_CAPACITY": "Capacidad del camión",
}

MODIFIER_TYPE_LABELS = {
    "MULTIPLIER": "Multiplicador",
    "FIXED_ADD": "Monto fijo",
}

CURRENCY_SYMBOL = "$"
DATE_FORMAT = "%d/%m/%Y"
