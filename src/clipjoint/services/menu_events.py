"""Explicit menu event subscription with a settle-delay re-poll.

The system reports a menu opening before the pasteboard state it shows is
guaranteed to be current, so clipboard availability is checked once right
away and once more after a short settle delay.
"""

import logging
from collections import defaultdict
from typing import Callable, DefaultDict, List, Optional, Protocol

logger = logging.getLogger(__name__)

MENU_WILL_OPEN = "menu_will_open"
DEFAULT_SETTLE_DELAY = 0.08


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall: ...


class RumpsScheduler:
    """One-shot callbacks on the main run loop using ``rumps.Timer``."""

    class _Call:
        def __init__(self, timer):
            self._timer = timer

        def cancel(self) -> None:
            if self._timer.is_alive():
                self._timer.stop()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        import rumps

        def fire(timer):
            timer.stop()
            callback()

        timer = rumps.Timer(fire, delay)
        timer.start()
        return self._Call(timer)


class MenuEventHub:

    def __init__(self) -> None:
        self._handlers: DefaultDict[str, List[Callable[[], None]]] = defaultdict(list)

    def subscribe(self, event: str, handler: Callable[[], None]) -> None:
        self._handlers[event].append(handler)

    def emit(self, event: str) -> None:
        for handler in list(self._handlers[event]):
            try:
                handler()
            except Exception:
                logger.exception("Error in %s handler", event)


class ClipboardAvailabilityMonitor:
    """Keeps the "Add Clip from Clipboard" enablement in sync with the pasteboard.

    Listeners are called with ``(has_clipboard_text, can_add_another_clip)``.
    """

    def __init__(
        self,
        store,
        hub: MenuEventHub,
        scheduler: Scheduler,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
    ) -> None:
        self.store = store
        self.scheduler = scheduler
        self.settle_delay = settle_delay
        self.has_clipboard_text = True
        self._listeners: List[Callable[[bool, bool], None]] = []
        self._pending: Optional[ScheduledCall] = None
        hub.subscribe(MENU_WILL_OPEN, self.menu_will_open)

    def add_listener(self, listener: Callable[[bool, bool], None]) -> None:
        self._listeners.append(listener)

    @property
    def add_clip_enabled(self) -> bool:
        return self.has_clipboard_text and self.store.can_add_another_clip

    def menu_will_open(self) -> None:
        # Open fast with the last known state, then reconcile with the pasteboard.
        self._apply()
        self.refresh()

        if self._pending is not None:
            self._pending.cancel()
        self._pending = self.scheduler.call_later(self.settle_delay, self._settled)

    def _settled(self) -> None:
        self._pending = None
        self.refresh()

    def refresh(self) -> None:
        self.has_clipboard_text = self.store.can_import_clipboard_text(force_refresh=True)
        self._apply()

    def _apply(self) -> None:
        can_add = self.store.can_add_another_clip
        for listener in list(self._listeners):
            listener(self.has_clipboard_text, can_add)


class StatusMenuTracker:
    """Emits ``MENU_WILL_OPEN`` only for begin-tracking notifications of one menu.

    ``status_menu`` returns the menu to watch; it is looked up on every
    notification because the app can replace its menu.
    """

    def __init__(self, hub: MenuEventHub, status_menu: Callable[[], object]) -> None:
        self.hub = hub
        self._status_menu = status_menu

    def __call__(self, notification) -> None:
        menu = self._status_menu()
        if menu is not None and notification.object() == menu:
            self.hub.emit(MENU_WILL_OPEN)
