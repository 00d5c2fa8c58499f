"""Background worker pool that hands results back to the UI thread.

Workers only run jobs. Every callback is queued as a UIEvent and executed
by poll_ui_events() on the main loop, so state is only ever touched from
the UI thread.
"""

from __future__ import annotations
from collections import deque
from queue import PriorityQueue, Empty
from threading import Thread, Lock
from typing import Any, Callable, Deque, List, Optional

from .config import ASYNC_WORKERS
from .types import LoadPriority, LoadTask, UIEvent
from .logging import log, now


class AsyncLoader:
    def __init__(self, workers: int = ASYNC_WORKERS):
        self.task_queue: PriorityQueue = PriorityQueue()
        self.running = True
        self.ui_events: Deque[UIEvent] = deque()
        self.ui_lock = Lock()
        self.workers: List[Thread] = []

        for _ in range(max(1, workers)):
            worker = Thread(target=self._worker_loop, daemon=True)
            worker.start()
            self.workers.append(worker)

    def _worker_loop(self):
        while self.running:
            try:
                task = self.task_queue.get(timeout=0.1)
            except Empty:
                continue

            result = None
            error = None

            try:
                result = task.job()
            except Exception as e:
                error = e

            if self.running:
                self._push_ui_event(task.callback, (result, error))
            self.task_queue.task_done()

    def _push_ui_event(self, callback: Callable, args: tuple):
        with self.ui_lock:
            self.ui_events.append(UIEvent(callback, args))

    def poll_ui_events(self, max_events: int = 100) -> int:
        """Run queued callbacks on the calling (UI) thread. Returns the count."""
        events_to_process = []
        with self.ui_lock:
            while self.ui_events and len(events_to_process) < max_events:
                events_to_process.append(self.ui_events.popleft())

        for event in events_to_process:
            try:
                event.callback(*event.args)
            except Exception as e:
                log(f"[UI_EVENT][ERR] {e!r}")
        return len(events_to_process)

    @property
    def pending_events(self) -> int:
        with self.ui_lock:
            return len(self.ui_events)

    def submit(
        self,
        label: str,
        job: Callable[[], Any],
        callback: Callable[[Any, Optional[BaseException]], None],
        priority: LoadPriority = LoadPriority.CONTENT,
    ) -> None:
        if not self.running:
            log(f"[LOADER] Dropped task after shutdown: {label}")
            return
        self.task_queue.put(LoadTask(label, priority, job, callback, now()))

    def shutdown(self):
        """Stop workers and discard undelivered results."""
        self.running = False
        for worker in self.workers:
            worker.join(timeout=1.0)
        with self.ui_lock:
            dropped = len(self.ui_events)
            self.ui_events.clear()
        if dropped:
            log(f"[LOADER] Discarded {dropped} undelivered results on shutdown")
