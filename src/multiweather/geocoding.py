# city name -> coordinate lookup, only needed by providers that are queried by position

from __future__ import annotations
import logging
from .client import APIClient, NoResultError
from .models import Coordinate, GeocodePayload

logger = logging.getLogger(__name__)

class OpenCageGeocoder(APIClient):
    name = "opencagedata"
    BASE_URL = "https://api.opencagedata.com/geocode/v1/json"

    def resolve(self, city: str) -> Coordinate:
        # first match wins, ambiguity resolution is the upstream's job
        data = self.get_json(self.BASE_URL, city, params={"key": self.api_key, "q": city})
        payload = GeocodePayload.from_json(data)
        if not payload.results:
            raise NoResultError(f"{self.name}: no location found for {city!r}")

        coord = payload.results[0]
        logger.info("%s: %s: lat=%f, long=%f", self.name, city, coord.latitude, coord.longitude)
        return coord
