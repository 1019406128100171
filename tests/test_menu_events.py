from clipjoint.clipboard.base import ClipboardPayload
from clipjoint.services.menu_events import (
    MENU_WILL_OPEN,
    ClipboardAvailabilityMonitor,
    MenuEventHub,
    StatusMenuTracker,
)


class ManualScheduler:

    class Call:
        def __init__(self, delay, callback):
            self.delay = delay
            self.callback = callback
            self.cancelled = False

        def cancel(self):
            self.cancelled = True

    def __init__(self):
        self.calls = []

    def call_later(self, delay, callback):
        call = self.Call(delay, callback)
        self.calls.append(call)
        return call

    def run_pending(self):
        pending, self.calls = self.calls, []
        for call in pending:
            if not call.cancelled:
                call.callback()


def test_hub_dispatches_to_subscribers():
    hub = MenuEventHub()
    seen = []
    hub.subscribe("a", lambda: seen.append("first"))
    hub.subscribe("a", lambda: seen.append("second"))
    hub.subscribe("b", lambda: seen.append("other"))

    hub.emit("a")

    assert seen == ["first", "second"]


def test_hub_survives_failing_handler():
    hub = MenuEventHub()
    seen = []

    def boom():
        raise RuntimeError("boom")

    hub.subscribe("a", boom)
    hub.subscribe("a", lambda: seen.append("ok"))
    hub.emit("a")

    assert seen == ["ok"]


def test_menu_open_applies_last_state_then_repolls(make_store, pasteboard):
    store = make_store()
    hub = MenuEventHub()
    scheduler = ManualScheduler()
    monitor = ClipboardAvailabilityMonitor(store, hub, scheduler, settle_delay=0.5)
    states = []
    monitor.add_listener(lambda has_text, can_add: states.append((has_text, can_add)))

    hub.emit(MENU_WILL_OPEN)

    # Last known state first, then the live pasteboard (empty).
    assert states == [(True, True), (False, True)]
    assert not monitor.add_clip_enabled
    assert [call.delay for call in scheduler.calls] == [0.5]

    pasteboard.set_payload(ClipboardPayload(plain="late text"))
    scheduler.run_pending()

    assert states[-1] == (True, True)
    assert monitor.add_clip_enabled


def test_reopening_replaces_pending_settle_poll(make_store):
    store = make_store()
    hub = MenuEventHub()
    scheduler = ManualScheduler()
    ClipboardAvailabilityMonitor(store, hub, scheduler)

    hub.emit(MENU_WILL_OPEN)
    first = scheduler.calls[0]
    hub.emit(MENU_WILL_OPEN)

    assert first.cancelled
    assert not scheduler.calls[1].cancelled


def test_add_disabled_at_capacity(make_store, pasteboard):
    store = make_store()
    for i in range(store.maximum_clip_count - len(store.clips)):
        store.add_clip(f"clip {i}")
    pasteboard.set_payload(ClipboardPayload(plain="text"))
    monitor = ClipboardAvailabilityMonitor(store, MenuEventHub(), ManualScheduler())

    monitor.refresh()

    assert monitor.has_clipboard_text
    assert not monitor.add_clip_enabled


class FakeNotification:

    def __init__(self, menu):
        self._menu = menu

    def object(self):
        return self._menu


def test_tracker_emits_only_for_status_menu():
    hub = MenuEventHub()
    opened = []
    hub.subscribe(MENU_WILL_OPEN, lambda: opened.append(True))
    status_menu, context_menu = object(), object()
    tracker = StatusMenuTracker(hub, lambda: status_menu)

    tracker(FakeNotification(context_menu))
    assert opened == []

    tracker(FakeNotification(status_menu))
    assert opened == [True]


def test_tracker_ignores_notifications_before_menu_exists():
    hub = MenuEventHub()
    opened = []
    hub.subscribe(MENU_WILL_OPEN, lambda: opened.append(True))

    StatusMenuTracker(hub, lambda: None)(FakeNotification(None))

    assert opened == []
