# thin http layer: parse the city from the path, ask the aggregator, render the answer

from __future__ import annotations
import logging
from flask import Flask, jsonify
from .service import MultiWeatherProvider

logger = logging.getLogger(__name__)

def _text(body: str, status: int):
    return body, status, {"Content-Type": "text/plain; charset=utf-8"}

def create_app(aggregator: MultiWeatherProvider) -> Flask:
    app = Flask(__name__)

    @app.get("/hello")
    def hello():
        return _text("Hello world!", 200)

    @app.get("/weather/")
    def weather_missing_city():
        return _text("city is required", 400)

    # path converter: everything after /weather/ is the city, slashes included
    @app.get("/weather/<path:city>")
    def weather(city: str):
        try:
            result = aggregator.aggregate(city)
        except Exception as exc:  # any provider or aggregation failure is a 500 with its message
            logger.error("weather lookup for %s failed: %s", city, exc)
            return _text(str(exc), 500)
        return jsonify(result.to_dict())

    return app
