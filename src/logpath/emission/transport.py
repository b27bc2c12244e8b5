"""HTTP delivery of log records.

``HttpTransport`` POSTs the JSON wire form of a record to an endpoint from
a small pool of daemon worker threads. Delivery is fire-and-forget: nothing
is retried, the response body is never read, and failures are reported
through the library logger instead of being raised to the instrumented
caller.

The backlog is bounded. When ``max_pending`` records are already waiting,
further records are dropped and logged as ``log_delivery_dropped``. Workers
are daemon threads, so a blackholed endpoint never holds up interpreter
exit; records still queued at that point are lost.
"""

from __future__ import annotations

import json
import queue
import threading
import urllib.error
import urllib.request
from typing import Any, Protocol, runtime_checkable

import structlog

from logpath.core.errors import LogPathError, TransportError

logger = structlog.get_logger(__name__)

_STOP = object()


@runtime_checkable
class Transport(Protocol):
    """Anything that can hand a record payload to a remote endpoint."""

    def send(self, endpoint: str, payload: dict[str, Any]) -> None:
        """Queue ``payload`` for delivery to ``endpoint``. Must not block on the network."""
        ...


class HttpTransport:
    """
    JSON-over-HTTP POST transport.

    Usage:
        transport = HttpTransport(headers={"Authorization": "Bearer ..."})
        transport.send("https://logs.example.com/ingest", record.to_dict())
        transport.close()
    """

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        headers: dict[str, str] | None = None,
        max_workers: int = 4,
        max_pending: int = 1000,
    ):
        self._timeout = timeout
        self._headers = headers or {}
        self._max_workers = max_workers
        self._queue: queue.Queue = queue.Queue(maxsize=max_pending)
        self._threads: list[threading.Thread] = []
        self._lock = threading.Lock()
        self._closed = False

    @property
    def pending(self) -> int:
        """Records waiting for a worker."""
        return self._queue.qsize()

    def send(self, endpoint: str, payload: dict[str, Any]) -> None:
        """Queue a POST of ``payload`` to ``endpoint``, or drop it if the backlog is full."""
        if self._closed:
            logger.warning("log_delivery_dropped", endpoint=endpoint, reason="closed")
            return
        self._start_workers()
        try:
            self._queue.put_nowait((endpoint, payload))
        except queue.Full:
            logger.warning("log_delivery_dropped", endpoint=endpoint, reason="backlog_full", pending=self.pending)

    def post(self, endpoint: str, payload: dict[str, Any]) -> int:
        """
        POST ``payload`` synchronously and return the HTTP status.

        An HTTP error status still counts as delivered; only failures to reach
        the endpoint raise.

        Raises:
            TransportError: the endpoint could not be reached
        """
        headers = {"Content-Type": "application/json"}
        headers.update(self._headers)

        try:
            req = urllib.request.Request(
                endpoint,
                data=json.dumps(payload, default=str).encode("utf-8"),
                headers=headers,
                method="POST",
            )
            with urllib.request.urlopen(req, timeout=self._timeout) as response:
                return response.status
        except urllib.error.HTTPError as e:
            logger.debug("log_delivery_rejected", endpoint=endpoint, status=e.code)
            return e.code
        except urllib.error.URLError as e:
            raise TransportError(endpoint, f"Failed to send log to {endpoint}: {e.reason}", cause=e) from e
        except (OSError, ValueError) as e:
            raise TransportError(endpoint, f"Failed to send log to {endpoint}: {e}", cause=e) from e

    def close(self, wait: bool = True, timeout: float | None = 5.0) -> None:
        """
        Stop accepting records.

        With ``wait`` the workers finish the records already queued (each
        worker joined for at most ``timeout`` seconds); without it queued
        records are discarded.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            threads = list(self._threads)

        if not wait:
            self._discard_pending()
        for _ in threads:
            self._queue.put(_STOP)
        if wait:
            for thread in threads:
                thread.join(timeout=timeout)
                if thread.is_alive():
                    logger.warning("transport_worker_still_running", thread=thread.name)

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _start_workers(self) -> None:
        if len(self._threads) >= self._max_workers:
            return
        with self._lock:
            while len(self._threads) < self._max_workers:
                thread = threading.Thread(
                    target=self._work,
                    name=f"logpath-http-{len(self._threads)}",
                    daemon=True,
                )
                thread.start()
                self._threads.append(thread)

    def _work(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                return
            endpoint, payload = item
            try:
                self.post(endpoint, payload)
            except Exception as e:
                _report_failure(endpoint, e)

    def _discard_pending(self) -> None:
        dropped = 0
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break
            dropped += 1
        if dropped:
            logger.warning("log_delivery_dropped", reason="closed", dropped=dropped)


def _report_failure(endpoint: str, exc: Exception) -> None:
    """Log a failed delivery."""
    if isinstance(exc, LogPathError):
        logger.error("log_delivery_failed", **exc.to_dict())
    else:
        logger.error("log_delivery_failed", endpoint=endpoint, error=str(exc), error_type=type(exc).__name__)
