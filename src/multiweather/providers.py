# weather provider adapters
# each one performs a single logical lookup and returns kelvin, errors propagate untouched

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from .client import APIClient, WeatherAPIError
from .geocoding import OpenCageGeocoder
from .models import DarkSkyPayload, OpenWeatherPayload
from .units import fahrenheit_to_kelvin

logger = logging.getLogger(__name__)

class WeatherProvider(ABC):
    # anything with a name and a temperature(city) -> kelvin method can be aggregated
    name = "provider"

    @abstractmethod
    def temperature(self, city: str) -> float:
        """Return the current temperature of `city` in kelvin or raise WeatherAPIError."""

class OpenWeatherMapProvider(APIClient, WeatherProvider):
    name = "openweathermap"
    BASE_URL = "http://api.openweathermap.org/data/2.5/weather"

    def temperature(self, city: str) -> float:
        # no units param, so the api answers in kelvin and nothing needs converting
        data = self.get_json(self.BASE_URL, city, params={"APPID": self.api_key, "q": city})
        kelvin = OpenWeatherPayload.from_json(data).temp
        logger.info("%s: %s: %.2f", self.name, city, kelvin)
        return kelvin

class DarkSkyProvider(APIClient, WeatherProvider):
    name = "darksky"
    BASE_URL = "https://api.darksky.net/forecast"

    def __init__(self, api_key: str, geocoder: OpenCageGeocoder, **kwargs):
        super().__init__(api_key, **kwargs)
        self.geocoder = geocoder

    def temperature(self, city: str) -> float:
        # geocode first, a failure there ends the lookup
        try:
            coord = self.geocoder.resolve(city)
        except WeatherAPIError as exc:
            logger.warning("%s: failed to find latitude and longitude for %s: %s", self.name, city, exc)
            raise

        url = f"{self.BASE_URL}/{self.api_key}/{coord}"
        data = self.get_json(url, city)
        fahrenheit = DarkSkyPayload.from_json(data).temperature
        logger.info("%s: %s: %.2f", self.name, city, fahrenheit)
        return fahrenheit_to_kelvin(fahrenheit)
