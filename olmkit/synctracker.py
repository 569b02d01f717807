"""Count sync results and emit an event for each one."""

from __future__ import annotations

import queue
import threading
from typing import Any


class SyncTracker:
    """Consumes sync results from a queue, counting total and successful syncs.

    Each item on the sync queue is ``None`` for a successful sync or an error
    otherwise; putting ``SyncTracker.CLOSED`` ends tracking. After every sync the
    cluster operator object is put on the events queue, and ``CLOSED`` is put
    there once tracking ends.
    """

    CLOSED: Any = object()
    _POLL_INTERVAL = 0.05

    def __init__(self, sync_queue: queue.Queue | None, cluster_operator: Any) -> None:
        self._sync_queue = sync_queue
        self._cluster_operator = cluster_operator
        self._events: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._start_lock = threading.Lock()
        self._started = False
        self._total_syncs = 0
        self._successful_syncs = 0

    def start(self, stop_event: threading.Event | None = None) -> None:
        """Track syncs until the queue closes or ``stop_event`` is set.

        Only the first call does any work.
        """
        if self._sync_queue is None or self._cluster_operator is None:
            raise ValueError(f"invalid {type(self).__name__} fields")

        with self._start_lock:
            if self._started:
                return
            self._started = True

        try:
            while stop_event is None or not stop_event.is_set():
                try:
                    item = self._sync_queue.get(timeout=self._POLL_INTERVAL)
                except queue.Empty:
                    continue
                if item is self.CLOSED:
                    return
                self._add_sync(item is None)
                self._events.put(self._cluster_operator)
        finally:
            self._events.put(self.CLOSED)

    def events(self) -> queue.Queue:
        return self._events

    def _add_sync(self, successful: bool) -> None:
        with self._lock:
            self._total_syncs += 1
            if successful:
                self._successful_syncs += 1

    def total_syncs(self) -> int:
        with self._lock:
            return self._total_syncs

    def successful_syncs(self) -> int:
        with self._lock:
            return self._successful_syncs