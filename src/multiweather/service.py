# orchestration and business rules.
# fan one city out to every provider on its own thread, fan the outcomes back in as they complete
# the first failure wins, stragglers are left to finish on their own and their results are dropped

from __future__ import annotations
import logging
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeout, as_completed
from typing import Iterable, Optional, Tuple
from .models import AggregateResult
from .providers import WeatherProvider

logger = logging.getLogger(__name__)

class AggregationError(RuntimeError):
    # failures that belong to the aggregator itself, provider errors are never wrapped in it
    pass

class NoProvidersError(AggregationError):
    pass

class AggregationTimeout(AggregationError):
    pass

class MultiWeatherProvider:
    """Average the temperature reported by several providers.

    The provider list is fixed at construction and shared read-only by every
    request. All values are kelvin; conversion is the providers' job.

    `timeout` bounds the wait for the whole fan-in. None waits for every
    outcome (each provider still has its own http timeout).
    """

    def __init__(self, providers: Iterable[WeatherProvider], timeout: Optional[float] = None):
        self.providers: Tuple[WeatherProvider, ...] = tuple(providers)
        self.timeout = timeout

    def temperature(self, city: str) -> float:
        n = len(self.providers)
        if n == 0:
            raise NoProvidersError("no weather providers configured")

        # one worker per provider, so no provider ever waits for a free thread
        pool = ThreadPoolExecutor(max_workers=n, thread_name_prefix="provider")
        try:
            futures = {pool.submit(p.temperature, city): p for p in self.providers}
            total = 0.0
            failed = None
            try:
                # completion order, not provider order
                for fut in as_completed(futures, timeout=self.timeout):
                    error = fut.exception()
                    if error is not None:
                        failed = fut
                        break
                    total += fut.result()
            except FuturesTimeout:
                raise AggregationTimeout(
                    f"timed out after {self.timeout}s waiting for providers for {city!r}"
                ) from None
        finally:
            # never block on stragglers, a slow provider must not hold up a failed request
            pool.shutdown(wait=False)

        if failed is not None:
            logger.warning("%s failed for %s: %s", futures[failed].name, city, error)
            raise error

        avg = total / n
        logger.debug("average for %s over %d providers: %.2f", city, n, avg)
        return avg

    def aggregate(self, city: str) -> AggregateResult:
        begin = time.perf_counter()
        temp = self.temperature(city)
        return AggregateResult(city=city, temperature=temp, elapsed=time.perf_counter() - begin)
