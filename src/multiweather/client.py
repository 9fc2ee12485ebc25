# OOP boundary for external i/o
# all http/keys/timeouts live here, so the rest of the code is pure and testable
# use a thread-local session per worker thread, the aggregator calls providers from a thread pool

from __future__ import annotations
import logging
import threading
from typing import Any, Dict, Optional
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)

class WeatherAPIError(RuntimeError):
    # base type for every failure talking to an upstream api
    pass

class TransportError(WeatherAPIError):
    # connection failure, timeout or non-2xx status
    pass

class DecodeError(WeatherAPIError):
    # body is not json or does not have the shape we consume
    pass

class NoResultError(WeatherAPIError):
    # upstream answered fine but had nothing for the query
    pass

class APIClient:
    # base for every upstream client, encapsulates session setup, timeout and error mapping
    name = "api"
    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = "multiweather/0.1",
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.user_agent = user_agent

        # each worker thread lazily obtains its own session through _session()
        self._local = threading.local()

        # a provider answers once or fails, retrying is left to the caller
        self._retry = Retry(total=0, raise_on_status=False)

    def _build_session(self) -> requests.Session:
        # central place to configure http behavior like headers and adapters
        s = requests.Session()
        s.headers.update({"User-Agent": self.user_agent})
        adapter = HTTPAdapter(max_retries=self._retry)
        s.mount("http://", adapter)
        s.mount("https://", adapter)
        return s

    def _session(self) -> requests.Session:
        # thread-local session creation
        sess = getattr(self._local, "session", None)
        if sess is None:
            sess = self._build_session()
            self._local.session = sess
        return sess

    def get_json(self, url: str, what: str, params: Optional[Dict[str, Any]] = None) -> Any:
        # one GET, mapped onto the error taxonomy; `what` names the lookup in messages
        logger.debug("%s: GET for %r", self.name, what)
        try:
            resp = self._session().get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"{self.name}: request error for {what!r}: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            # include a short response snippet to speed up triage
            snippet = (resp.text or "")[:300]
            raise TransportError(f"{self.name}: HTTP {resp.status_code} for {what!r}. Body: {snippet}")

        try:
            return resp.json()
        except ValueError as exc:
            raise DecodeError(f"{self.name}: invalid JSON for {what!r}: {exc}") from exc
