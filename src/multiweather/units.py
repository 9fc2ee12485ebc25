# temperature conversions. kelvin is the canonical unit every provider hands to the aggregator

ABSOLUTE_ZERO_C = -273.15


def fahrenheit_to_kelvin(f: float) -> float:
    return (f + 459.67) * 5.0 / 9.0


def kelvin_to_fahrenheit(k: float) -> float:
    return k * 9.0 / 5.0 - 459.67


def celsius_to_kelvin(c: float) -> float:
    return c - ABSOLUTE_ZERO_C


def kelvin_to_celsius(k: float) -> float:
    return k + ABSOLUTE_ZERO_C
