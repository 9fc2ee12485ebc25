# connects configuration (env + flags) to providers, the aggregator and the http server

from __future__ import annotations
import argparse
import logging
from typing import List, Optional
from .config import Settings, load_settings
from .geocoding import OpenCageGeocoder
from .providers import DarkSkyProvider, OpenWeatherMapProvider
from .server import create_app
from .service import MultiWeatherProvider

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    # every flag defaults to None so unset flags fall back to the environment
    p = argparse.ArgumentParser(prog="multiweather", description="Average city temperature across weather providers.")
    p.add_argument("--openweathermap.api.key", dest="openweathermap_api_key", help="openweathermap.org API key")
    p.add_argument("--darksky.api.key", dest="darksky_api_key", help="darksky.net API key")
    p.add_argument("--opencage.api.key", dest="opencage_api_key", help="opencagedata.com API key")
    p.add_argument("--host")
    p.add_argument("--port", type=int)
    p.add_argument("--http-timeout", dest="http_timeout", type=float, help="per request timeout in seconds")
    p.add_argument("--log-level", dest="log_level", type=str.upper)
    return p

def build_aggregator(settings: Settings) -> MultiWeatherProvider:
    # provider order only matters for logs, results are combined in completion order
    timeout = settings.http_timeout
    geocoder = OpenCageGeocoder(settings.opencage_api_key, timeout=timeout)
    return MultiWeatherProvider([
        OpenWeatherMapProvider(settings.openweathermap_api_key, timeout=timeout),
        DarkSkyProvider(settings.darksky_api_key, geocoder, timeout=timeout),
    ])

def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    settings = load_settings().with_overrides(**vars(args))

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    for name in settings.placeholder_keys():
        logger.warning("%s api key is not set, its requests will fail", name)

    app = create_app(build_aggregator(settings))
    # threaded so concurrent requests do not queue behind a slow provider
    app.run(host=settings.host, port=settings.port, threaded=True)

if __name__ == "__main__":
    main()
