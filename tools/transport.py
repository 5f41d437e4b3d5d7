"""
Transports deliver finished records to the log sink.

``send`` is fire-and-forget: it returns as soon as delivery is scheduled.
Delivery failures are owned and reported by the transport and never
retried.
"""

import asyncio
import concurrent.futures
import logging
import threading
from typing import Dict, Optional, Protocol, Set, runtime_checkable

import aiohttp

from logbeacon_logging.core.logger_factory import LoggerFactory
from pipeline.exceptions import TransportResponseError
from schemas.log_schemas import LogLevel, LogRecord

LEVEL_TO_LOGGING = {
    LogLevel.INFORMATION: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


@runtime_checkable
class Transport(Protocol):
    def send(self, endpoint: str, record: LogRecord) -> None: ...


class HttpTransport:
    """
    POSTs each record as JSON to the endpoint from a dedicated event loop
    thread, so callers with or without a running loop can hand records off
    without blocking.
    """

    def __init__(self, app_name: str = "", timeout: float = 10.0, headers: Optional[Dict[str, str]] = None):
        """
        Args:
            app_name: Sent in the ``X-Application`` header when set
            timeout: Total seconds allowed per request
            headers: Extra request headers
        """
        self.logger = LoggerFactory().get_logger("logbeacon.transport.http")
        self.timeout = timeout
        self.headers: Dict[str, str] = {"Content-Type": "application/json"}
        if app_name:
            self.headers["X-Application"] = app_name
        if headers:
            self.headers.update(headers)

        self.sent = 0
        self.failed = 0

        self._lock = threading.Lock()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._session: Optional[aiohttp.ClientSession] = None
        self._pending: Set[concurrent.futures.Future] = set()

    def _ensure_loop(self) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self._loop is None:
                self._loop = asyncio.new_event_loop()
                self._thread = threading.Thread(
                    target=self._loop.run_forever, name="logbeacon-transport", daemon=True)
                self._thread.start()
                self.logger.debug("Transport loop started")
            return self._loop

    def send(self, endpoint: str, record: LogRecord) -> None:
        loop = self._ensure_loop()
        future = asyncio.run_coroutine_threadsafe(self._deliver(endpoint, record.to_wire()), loop)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)

    def _forget(self, future: concurrent.futures.Future) -> None:
        with self._lock:
            self._pending.discard(future)

    async def _deliver(self, endpoint: str, payload: Dict) -> None:
        # Runs on the transport loop only, so the counters have a single writer.
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))

        try:
            async with self._session.post(endpoint, json=payload, headers=self.headers) as response:
                if response.status >= 400:
                    body = await response.text()
                    raise TransportResponseError(endpoint, response.status, body[:1000])
            self.sent += 1
        except (aiohttp.ClientError, asyncio.TimeoutError, TransportResponseError) as e:
            self.failed += 1
            self.logger.warning(f"Failed to deliver log record: {e}", extra={
                "endpoint": endpoint,
                "record_level": payload.get("level"),
                "error_type": type(e).__name__
            })

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._pending)

    def drain(self, timeout: Optional[float] = None) -> bool:
        """
        Block until scheduled deliveries finish. Do not call from a coroutine.

        Returns:
            True if nothing is left pending
        """
        with self._lock:
            pending = list(self._pending)
        _, not_done = concurrent.futures.wait(pending, timeout=timeout)
        return not not_done

    async def flush(self) -> None:
        """Await scheduled deliveries from inside a running event loop."""
        with self._lock:
            pending = list(self._pending)
        if pending:
            await asyncio.gather(*(asyncio.wrap_future(f) for f in pending), return_exceptions=True)

    def close(self, timeout: float = 5.0) -> None:
        """Wait for in-flight deliveries, then close the session and stop the loop."""
        with self._lock:
            loop, thread = self._loop, self._thread
        if loop is None:
            return

        if not self.drain(timeout):
            self.logger.warning("Closing transport with undelivered records", extra={"pending": self.pending})

        if self._session is not None:
            asyncio.run_coroutine_threadsafe(self._session.close(), loop).result(timeout)
            self._session = None

        loop.call_soon_threadsafe(loop.stop)
        if thread is not None:
            thread.join(timeout)
        loop.close()

        with self._lock:
            self._loop = None
            self._thread = None

        self.logger.debug("Transport closed", extra={"sent": self.sent, "failed": self.failed})


class ConsoleTransport:
    """Writes records to the local ``logbeacon.transport.console`` logger."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or LoggerFactory().get_logger("logbeacon.transport.console")
        self.sent = 0

    def send(self, endpoint: str, record: LogRecord) -> None:
        self.logger.log(
            LEVEL_TO_LOGGING[record.level],
            record.message,
            extra={"endpoint": endpoint, "fields": dict(record.fields)}
        )
        self.sent += 1
