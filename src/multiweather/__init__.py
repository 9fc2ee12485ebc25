# multiweather: average the current temperature of a city across several weather providers

__version__ = "0.1.0"
