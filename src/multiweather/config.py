# runtime settings: .env / environment first, command line flags override

from __future__ import annotations
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional
from dotenv import load_dotenv

# upstream calls made with the placeholder fail with the provider's own error message
PLACEHOLDER_KEY = "changeme"

class ConfigError(ValueError):
    pass

@dataclass(frozen=True)
class Settings:
    openweathermap_api_key: str = PLACEHOLDER_KEY
    darksky_api_key: str = PLACEHOLDER_KEY
    opencage_api_key: str = PLACEHOLDER_KEY
    host: str = "0.0.0.0"
    port: int = 8080
    http_timeout: float = 10.0
    log_level: str = "INFO"

    def with_overrides(self, **overrides) -> "Settings":
        # None means "flag not given", keep the current value
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def placeholder_keys(self) -> list:
        keys = {
            "openweathermap": self.openweathermap_api_key,
            "darksky": self.darksky_api_key,
            "opencage": self.opencage_api_key,
        }
        return [name for name, key in keys.items() if key == PLACEHOLDER_KEY]

def _parse(env: Mapping[str, str], name: str, cast, default):
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigError(f"{name}={raw!r} is not a valid {cast.__name__}") from exc

def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    # in production, environment variables are injected by docker, kubernetes, cloud provider
    if env is None:
        load_dotenv()
        env = os.environ

    d = Settings()
    return Settings(
        openweathermap_api_key=env.get("OPENWEATHERMAP_API_KEY") or d.openweathermap_api_key,
        darksky_api_key=env.get("DARKSKY_API_KEY") or d.darksky_api_key,
        opencage_api_key=env.get("OPENCAGE_API_KEY") or d.opencage_api_key,
        host=env.get("MULTIWEATHER_HOST") or d.host,
        port=_parse(env, "MULTIWEATHER_PORT", int, d.port),
        http_timeout=_parse(env, "MULTIWEATHER_HTTP_TIMEOUT", float, d.http_timeout),
        log_level=(env.get("MULTIWEATHER_LOG_LEVEL") or d.log_level).upper(),
    )
