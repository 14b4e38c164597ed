"""Request runner that executes blocking API calls on a Qt thread pool."""

from __future__ import annotations

import logging
from typing import Any, Callable

from PySide6.QtCore import QObject, QRunnable, Qt, QThreadPool, Signal, Slot

from banana_client.constants.network_constants import REQUEST_WORKER_COUNT
from banana_client.core.errors import BananaClientError

logger = logging.getLogger(__name__)


class _RequestRelay(QObject):
    """Lives on the GUI thread and hands worker results to the callbacks there."""

    succeeded = Signal(object)
    failed = Signal(object)

    def __init__(
        self,
        on_success: Callable[[Any], None],
        on_failure: Callable[[Exception], None],
        on_done: Callable[[_RequestRelay], None],
    ) -> None:
        super().__init__()
        self._on_success = on_success
        self._on_failure = on_failure
        self._on_done = on_done
        self.succeeded.connect(self._deliver_success, Qt.QueuedConnection)
        self.failed.connect(self._deliver_failure, Qt.QueuedConnection)

    @Slot(object)
    def _deliver_success(self, result: object) -> None:
        try:
            self._on_success(result)
        finally:
            self._on_done(self)

    @Slot(object)
    def _deliver_failure(self, exc: object) -> None:
        try:
            self._on_failure(exc)
        finally:
            self._on_done(self)


class _RequestTask(QRunnable):
    def __init__(self, call: Callable[[], Any], relay: _RequestRelay) -> None:
        super().__init__()
        self._call = call
        self._relay = relay

    def run(self) -> None:
        try:
            result = self._call()
        except BananaClientError as exc:
            self._relay.failed.emit(exc)
            return
        except Exception as exc:
            logger.exception("Unexpected error in background request")
            self._relay.failed.emit(exc)
            return
        self._relay.succeeded.emit(result)


class QtRequestRunner:
    """Runs each call on a worker thread; callbacks fire on the GUI thread."""

    def __init__(self, pool: QThreadPool | None = None) -> None:
        self._pool = pool or QThreadPool()
        self._pool.setMaxThreadCount(REQUEST_WORKER_COUNT)
        self._relays: set[_RequestRelay] = set()

    def run(
        self,
        call: Callable[[], Any],
        on_success: Callable[[Any], None],
        on_failure: Callable[[Exception], None],
    ) -> None:
        relay = _RequestRelay(on_success, on_failure, self._relays.discard)
        self._relays.add(relay)
        self._pool.start(_RequestTask(call, relay))

    def wait_for_done(self, msecs: int = 3000) -> bool:
        return self._pool.waitForDone(msecs)
