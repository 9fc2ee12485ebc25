# unit tests for the aggregator, kept fast and independent of live http by using in-memory providers

import threading
import time

import pytest

from multiweather.client import DecodeError, TransportError
from multiweather.providers import WeatherProvider
from multiweather.service import AggregationTimeout, MultiWeatherProvider, NoProvidersError


class FixedProvider(WeatherProvider):
    def __init__(self, kelvin, delay=0.0, name="fixed"):
        self.kelvin = kelvin
        self.delay = delay
        self.name = name

    def temperature(self, city):
        if self.delay:
            time.sleep(self.delay)
        return self.kelvin


class FailingProvider(WeatherProvider):
    def __init__(self, error, delay=0.0, name="failing"):
        self.error = error
        self.delay = delay
        self.name = name

    def temperature(self, city):
        if self.delay:
            time.sleep(self.delay)
        raise self.error


class BlockingProvider(WeatherProvider):
    # stays in flight until the test releases it
    name = "blocking"

    def __init__(self, kelvin=300.0):
        self.kelvin = kelvin
        self.release = threading.Event()
        self.finished = threading.Event()

    def temperature(self, city):
        self.release.wait(timeout=5)
        self.finished.set()
        return self.kelvin


def test_average_of_all_providers():
    agg = MultiWeatherProvider([FixedProvider(280.0), FixedProvider(290.0), FixedProvider(300.0)])
    assert agg.temperature("Portland") == pytest.approx(290.0)


def test_average_does_not_depend_on_completion_order():
    # the slowest provider is first in the list, the fastest last
    agg = MultiWeatherProvider([
        FixedProvider(270.0, delay=0.15),
        FixedProvider(280.0, delay=0.05),
        FixedProvider(296.0, delay=0.0),
    ])
    assert agg.temperature("Portland") == pytest.approx(282.0)


def test_single_provider_is_its_own_average():
    assert MultiWeatherProvider([FixedProvider(273.15)]).temperature("Oslo") == pytest.approx(273.15)


def test_one_failure_fails_the_whole_request():
    # never a partial average of the two that worked (285.0)
    boom = TransportError("openweathermap: HTTP 401 for 'Portland'")
    agg = MultiWeatherProvider([FailingProvider(boom), FixedProvider(280.0), FixedProvider(290.0)])
    with pytest.raises(TransportError) as excinfo:
        agg.temperature("Portland")
    # propagated unchanged, not wrapped
    assert excinfo.value is boom


def test_all_failing_returns_one_of_the_errors():
    errors = [TransportError("a"), DecodeError("b"), TransportError("c")]
    agg = MultiWeatherProvider([FailingProvider(e) for e in errors])
    with pytest.raises(Exception) as excinfo:
        agg.temperature("Portland")
    # which one depends on timing, only membership is stable
    assert any(excinfo.value is e for e in errors)


def test_empty_provider_list_is_an_explicit_error():
    with pytest.raises(NoProvidersError):
        MultiWeatherProvider([]).temperature("Portland")


def test_providers_run_in_parallel():
    delays = [0.2, 0.3, 0.4]
    agg = MultiWeatherProvider([FixedProvider(280.0, delay=d) for d in delays])

    begin = time.perf_counter()
    agg.temperature("Portland")
    took = time.perf_counter() - begin

    # close to the slowest provider, well below the sum (0.9s) of a sequential loop
    assert took >= max(delays)
    assert took < sum(delays) - 0.2


def test_failure_does_not_wait_for_slow_providers():
    slow = BlockingProvider()
    agg = MultiWeatherProvider([slow, FailingProvider(DecodeError("bad body"), delay=0.05)])
    try:
        begin = time.perf_counter()
        with pytest.raises(DecodeError):
            agg.temperature("Portland")
        assert time.perf_counter() - begin < 2
        # the straggler is still running, nobody cancelled or joined it
        assert not slow.finished.is_set()
    finally:
        slow.release.set()
    assert slow.finished.wait(timeout=5)


def test_timeout_bounds_the_wait():
    slow = BlockingProvider()
    agg = MultiWeatherProvider([slow, FixedProvider(280.0)], timeout=0.1)
    try:
        with pytest.raises(AggregationTimeout):
            agg.temperature("Portland")
    finally:
        slow.release.set()


def test_aggregate_wraps_result():
    agg = MultiWeatherProvider([FixedProvider(280.0), FixedProvider(290.0)])
    result = agg.aggregate("Portland")
    assert result.city == "Portland"
    assert result.temperature == pytest.approx(285.0)
    assert result.elapsed >= 0
    assert result.to_dict() == {"city": "Portland", "temp": result.temperature, "took": result.took}


def test_providers_are_fixed_at_construction():
    providers = [FixedProvider(280.0)]
    agg = MultiWeatherProvider(providers)
    providers.append(FixedProvider(0.0))
    assert agg.temperature("Portland") == pytest.approx(280.0)
