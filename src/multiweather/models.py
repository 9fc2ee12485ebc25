# models and small helpers that keep data shapes explicit across the app
# upstream payloads are decoded into typed value objects that carry only the fields we consume

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List

from .client import DecodeError

@dataclass(frozen=True)
class Coordinate:
    # produced by the geocoder, consumed by coordinate based providers, never stored
    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"{self.latitude:f},{self.longitude:f}"

@dataclass(frozen=True)
class AggregateResult:
    # output value object of one successful aggregation, temperature is in kelvin
    city: str
    temperature: float
    elapsed: float  # seconds

    @property
    def took(self) -> str:
        return format_duration(self.elapsed)

    def to_dict(self) -> dict:
        return {"city": self.city, "temp": self.temperature, "took": self.took}

def _number(value: Any, path: str) -> float:
    # bool is an int subclass, reject it so {"temp": true} is not read as 1.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"expected a number at {path}, got {value!r}")
    return float(value)

def _field(data: Any, key: str, path: str) -> Any:
    if not isinstance(data, dict):
        raise DecodeError(f"expected an object at {path or '<root>'}, got {type(data).__name__}")
    if key not in data:
        raise DecodeError(f"missing field {path + '.' if path else ''}{key}")
    return data[key]

@dataclass(frozen=True)
class OpenWeatherPayload:
    # openweathermap shape: data["main"]["temp"], kelvin unless a units param is sent
    temp: float

    @classmethod
    def from_json(cls, data: Any) -> "OpenWeatherPayload":
        main = _field(data, "main", "")
        return cls(temp=_number(_field(main, "temp", "main"), "main.temp"))

@dataclass(frozen=True)
class DarkSkyPayload:
    # darksky shape: data["currently"]["temperature"], fahrenheit with the default us units
    temperature: float

    @classmethod
    def from_json(cls, data: Any) -> "DarkSkyPayload":
        currently = _field(data, "currently", "")
        return cls(temperature=_number(_field(currently, "temperature", "currently"), "currently.temperature"))

@dataclass(frozen=True)
class GeocodePayload:
    # opencage shape: data["results"][i]["geometry"]["lat" | "lng"]
    results: List[Coordinate]

    @classmethod
    def from_json(cls, data: Any) -> "GeocodePayload":
        results = _field(data, "results", "")
        if not isinstance(results, list):
            raise DecodeError(f"expected a list at results, got {type(results).__name__}")
        coords = []
        for i, item in enumerate(results):
            path = f"results[{i}].geometry"
            geometry = _field(item, "geometry", f"results[{i}]")
            coords.append(Coordinate(
                latitude=_number(_field(geometry, "lat", path), path + ".lat"),
                longitude=_number(_field(geometry, "lng", path), path + ".lng"),
            ))
        return cls(results=coords)

def mean(values: List[float]) -> float:
    # callers guard the empty case, an average of nothing has no meaning here
    if not values:
        raise ValueError("mean() of an empty sequence")
    return sum(values) / len(values)

_NS_PER_HOUR = 3_600_000_000_000
_NS_PER_MINUTE = 60_000_000_000

def _trim(value: float, digits: int) -> str:
    return f"{value:.{digits}f}".rstrip("0").rstrip(".")

def format_duration(seconds: float) -> str:
    # compact human readable duration: 812µs, 250.3ms, 1.5s, 1m2.5s, 2h0m1s
    if seconds < 0:
        return "-" + format_duration(-seconds)
    ns = round(seconds * 1e9)
    if ns == 0:
        return "0s"
    if ns < 1_000:
        return f"{ns}ns"
    if ns < 1_000_000:
        return _trim(ns / 1e3, 3) + "µs"
    if ns < 1_000_000_000:
        return _trim(ns / 1e6, 6) + "ms"

    hours, rem = divmod(ns, _NS_PER_HOUR)
    minutes, rem = divmod(rem, _NS_PER_MINUTE)
    out = ""
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return out + _trim(rem / 1e9, 9) + "s"
