"""A small in-process publish/subscribe bus keyed by event type."""

from __future__ import annotations

import itertools
import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

log = logging.getLogger(__name__)

EventCallback = Callable[[Any], None]

JOB_TIMEOUT = 30.0
_POLL_INTERVAL = 0.05

_ids = itertools.count(1)


@dataclass(eq=False)
class Subscription:
    """A registered callback for one event type; close it to unsubscribe."""

    event_type: type
    callback: EventCallback
    bus: "EventBus"
    id: int = field(default_factory=lambda: next(_ids))

    def close(self) -> None:
        """Remove this subscription from its bus."""
        self.bus.unsubscribe(self)

    def _invoke(self, event: Any) -> None:
        if isinstance(event, self.event_type):
            self.callback(event)


class EventBus:
    """Delivers published events to subscribers on a background worker thread."""

    def __init__(self) -> None:
        self._subscribers: dict[type, list[Subscription]] = {}
        self._lock = threading.RLock()
        self._queue: queue.Queue = queue.Queue()
        self._stopped = threading.Event()
        self._worker: Optional[threading.Thread] = None
        self._running = False

    @property
    def running(self) -> bool:
        with self._lock:
            return self._running

    def __enter__(self) -> "EventBus":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop(5.0)

    def start(self) -> None:
        """Start the worker thread; does nothing if already running."""
        with self._lock:
            if self._running:
                return
            self._queue = queue.Queue()
            self._stopped = threading.Event()
            self._worker = threading.Thread(
                target=self._run,
                args=(self._queue, self._stopped),
                name="eventbus-worker",
                daemon=True,
            )
            self._worker.start()
            self._running = True

    def stop(self, timeout: float) -> None:
        """Signal the worker to exit and wait up to ``timeout`` seconds for it."""
        with self._lock:
            if not self._running:
                return
            worker = self._worker
            self._stopped.set()
        if worker is not None:
            worker.join(timeout)
            if worker.is_alive():
                log.warning("event bus did not stop after timeout of %ss", timeout)
            else:
                log.debug("event bus worker exited")
        with self._lock:
            self._running = False
            self._worker = None

    def subscribe(self, event_type: Any, callback: EventCallback) -> Subscription:
        """Register ``callback`` for events of ``event_type`` (a type or an example instance)."""
        key = event_type if isinstance(event_type, type) else type(event_type)
        sub = Subscription(event_type=key, callback=callback, bus=self)
        with self._lock:
            self._subscribers.setdefault(key, []).append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove ``subscription``; unknown subscriptions are ignored."""
        with self._lock:
            subs = self._subscribers.get(subscription.event_type, [])
            self._subscribers[subscription.event_type] = [
                s for s in subs if s.id != subscription.id
            ]

    def subscribers(self, event_type: type) -> list[Subscription]:
        """Return a copy of the subscriptions registered for ``event_type``."""
        with self._lock:
            return list(self._subscribers.get(event_type, []))

    def publish(self, event: Any) -> None:
        """Queue ``event`` for delivery; dropped when the bus is not running."""
        with self._lock:
            if not self._running or self._stopped.is_set():
                return
            self._queue.put(event)

    def _run(self, jobs: queue.Queue, stopped: threading.Event) -> None:
        while not stopped.is_set():
            try:
                event = jobs.get(timeout=_POLL_INTERVAL)
            except queue.Empty:
                continue
            errors = self._handle(event, stopped)
            if errors:
                log.error(
                    "handleEvent failure in worker: %s",
                    "\n".join(str(e) for e in errors),
                )
        log.debug("worker stopped")

    def _handle(self, event: Any, stopped: threading.Event) -> list[Exception]:
        deadline = time.monotonic() + JOB_TIMEOUT
        errors: list[Exception] = []
        for sub in self.subscribers(type(event)):
            if stopped.is_set():
                return [RuntimeError("event bus stopped")]
            if time.monotonic() > deadline:
                errors.append(TimeoutError("job deadline exceeded"))
                continue
            try:
                sub._invoke(event)
            except Exception as exc:  # handler failures are collected, not fatal
                errors.append(exc)
        return errors


_default_lock = threading.Lock()
_default: Optional[EventBus] = None


def default_bus() -> EventBus:
    """Return the process-wide bus, creating it on first use."""
    global _default
    with _default_lock:
        if _default is None:
            _default = EventBus()
        return _default


def subscribe(event_type: Any, callback: EventCallback) -> Subscription:
    """Subscribe on the default bus."""
    return default_bus().subscribe(event_type, callback)


def unsubscribe(subscription: Subscription) -> None:
    """Unsubscribe from the default bus."""
    default_bus().unsubscribe(subscription)


def publish(event: Any) -> None:
    """Publish on the default bus."""
    default_bus().publish(event)