"""Menu bar application.

Everything the menu needs is passed in explicitly; ``build_app`` is the
composition root used by the command line entry point.
"""

import logging
from functools import partial
from typing import List, Optional

import rumps
from AppKit import NSMenuDidBeginTrackingNotification
from Foundation import NSNotificationCenter

from clipjoint import __version__
from clipjoint.clipboard import get_pasteboard
from clipjoint.config import Settings
from clipjoint.services.clip_store import ClipStore
from clipjoint.services.login_items import AppSettings, LoginItemManager
from clipjoint.services.menu_events import (
    MENU_WILL_OPEN,
    ClipboardAvailabilityMonitor,
    MenuEventHub,
    RumpsScheduler,
    StatusMenuTracker,
)
from clipjoint.services.menu_model import ClipRow, EditorRow, build_menu_model, layout_budget
from clipjoint.services.notifier import Notifier, RumpsNotifier
from clipjoint.utils.screens import pointer_location, system_displays

logger = logging.getLogger(__name__)

ADD_CLIP_MENU_TITLE = "Add Clip from Clipboard"


class ClipJointApp(rumps.App):

    def __init__(
        self,
        store: ClipStore,
        app_settings: AppSettings,
        notifier: Notifier,
        hub: MenuEventHub,
        monitor: ClipboardAvailabilityMonitor,
    ):
        super().__init__("ClipJoint", title="📋", quit_button=None)
        self.store = store
        self.app_settings = app_settings
        self.notifier = notifier
        self.hub = hub
        self.monitor = monitor
        self._add_clip_item: Optional[rumps.MenuItem] = None
        self._menu_observer = None
        self._layout_budget: Optional[int] = None

        store.subscribe(self._build_menu)
        monitor.add_listener(self._apply_add_clip_enabled)
        hub.subscribe(MENU_WILL_OPEN, self._menu_will_open)
        self._build_menu()
        self._observe_menu_tracking()

    # ---------------------------------------------------------------------
    # Menu construction
    # ---------------------------------------------------------------------
    def _build_menu(self) -> None:
        model = build_menu_model(
            self.store, system_displays(), pointer_location(), self.monitor.has_clipboard_text)
        self._layout_budget = model.budget

        self.menu.clear()

        self.menu.add(rumps.MenuItem("About ClipJoint", callback=self._on_about))
        self.menu.add(self._settings_menu())
        self.menu.add(None)

        if model.show_empty_row:
            self.menu.add(rumps.MenuItem("No saved clips"))
        else:
            for row in model.primary:
                self.menu[row.clip_id] = self._clip_item(row)

            if model.overflow:
                more = rumps.MenuItem("More")
                for row in model.overflow:
                    more[row.clip_id] = self._clip_item(row)
                self.menu.add(more)

        self.menu.add(None)
        self._add_clip_item = rumps.MenuItem(
            ADD_CLIP_MENU_TITLE,
            callback=self._on_add_clipboard_clip if model.add_clip_enabled else None)
        self.menu.add(self._add_clip_item)
        self.menu.add(self._editor_menu(model.add_blank_enabled, model.editor_rows))
        self.menu.add(None)
        self.menu.add(rumps.MenuItem("Quit", callback=self._on_quit, key="q"))

    def _menu_will_open(self) -> None:
        # The pointer may have moved to a display of a different height.
        if layout_budget(system_displays(), pointer_location()) != self._layout_budget:
            self._build_menu()

    def _clip_item(self, row: ClipRow) -> rumps.MenuItem:
        item = rumps.MenuItem(row.label, callback=partial(self._on_copy_clip, row.clip_id))
        item._menuitem.setToolTip_(row.tooltip)
        return item

    def _settings_menu(self) -> rumps.MenuItem:
        settings = rumps.MenuItem("Settings")
        launch = rumps.MenuItem("Launch automatically at login", callback=self._on_toggle_launch_at_login)
        launch.state = int(self.app_settings.launch_at_login_enabled)
        settings.add(launch)
        return settings

    def _editor_menu(self, add_blank_enabled: bool, rows: List[EditorRow]) -> rumps.MenuItem:
        editor = rumps.MenuItem("Edit Clips")
        editor.add(rumps.MenuItem(
            "Add Blank Clip", callback=self._on_add_blank_clip if add_blank_enabled else None))
        if rows:
            editor.add(None)

        for row in rows:
            item = rumps.MenuItem(row.label)
            item.add(rumps.MenuItem(row.preview))
            item.add(None)
            item.add(rumps.MenuItem("Rename…", callback=partial(self._on_rename_clip, row.clip_id)))
            item.add(rumps.MenuItem("Edit Text…", callback=partial(self._on_edit_clip_text, row.clip_id)))
            item.add(rumps.MenuItem(
                "Move Up",
                callback=partial(self._on_move_clip, row.clip_id, -1) if row.can_move_up else None))
            item.add(rumps.MenuItem(
                "Move Down",
                callback=partial(self._on_move_clip, row.clip_id, 1) if row.can_move_down else None))
            item.add(None)
            item.add(rumps.MenuItem("Delete", callback=partial(self._on_delete_clip, row.clip_id)))
            editor[f"edit:{row.clip_id}"] = item
        return editor

    def _apply_add_clip_enabled(self, has_clipboard_text: bool, can_add: bool) -> None:
        if self._add_clip_item is None:
            return
        enabled = has_clipboard_text and can_add
        self._add_clip_item.set_callback(self._on_add_clipboard_clip if enabled else None)

    def _observe_menu_tracking(self) -> None:
        tracker = StatusMenuTracker(self.hub, lambda: self.menu._menu)

        def menu_did_begin_tracking(notification):
            tracker(notification)

        self._menu_observer = NSNotificationCenter.defaultCenter().addObserverForName_object_queue_usingBlock_(
            NSMenuDidBeginTrackingNotification, None, None, menu_did_begin_tracking)

    # ---------------------------------------------------------------------
    # Actions
    # ---------------------------------------------------------------------
    def _on_about(self, _sender) -> None:
        rumps.alert(title="ClipJoint", message=f"Version {__version__}")

    def _on_toggle_launch_at_login(self, sender) -> None:
        self.app_settings.set_launch_at_login(not sender.state)
        sender.state = int(self.app_settings.launch_at_login_enabled)
        if self.app_settings.launch_at_login_error:
            rumps.alert(title="Launch at Login", message=self.app_settings.launch_at_login_error)

    def _on_copy_clip(self, clip_id: str, _sender) -> None:
        clip = self.store.clip(clip_id)
        if clip is not None:
            self.store.copy_clip(clip)

    def _on_add_clipboard_clip(self, _sender) -> None:
        if self.store.add_clipboard_clip():
            self.notifier.show("Clip Added")
        self.monitor.refresh()

    def _on_add_blank_clip(self, _sender) -> None:
        clip_id = self.store.add_blank_clip()
        if clip_id is not None:
            self._on_rename_clip(clip_id, None)

    def _on_rename_clip(self, clip_id: str, _sender) -> None:
        clip = self.store.clip(clip_id)
        if clip is None:
            return

        response = rumps.Window(
            message="Clip name", title="Rename Clip", default_text=clip.name,
            ok="Save", cancel="Cancel", dimensions=(320, 24),
        ).run()
        if response.clicked:
            self.store.update_name(clip_id, response.text)

    def _on_edit_clip_text(self, clip_id: str, _sender) -> None:
        clip = self.store.clip(clip_id)
        if clip is None:
            return

        response = rumps.Window(
            message="Clip text", title="Edit Clip", default_text=clip.text,
            ok="Save", cancel="Cancel", dimensions=(420, 160),
        ).run()
        if response.clicked:
            self.store.update_text(clip_id, response.text)

    def _on_move_clip(self, clip_id: str, direction: int, _sender) -> None:
        self.store.move_clip(clip_id, direction)

    def _on_delete_clip(self, clip_id: str, _sender) -> None:
        self.store.delete_clip(clip_id)

    def _on_quit(self, _sender) -> None:
        if self._menu_observer is not None:
            NSNotificationCenter.defaultCenter().removeObserver_(self._menu_observer)
        rumps.quit_application()


def build_app(settings: Settings) -> ClipJointApp:
    notifier = RumpsNotifier()
    store = ClipStore(
        preferences=settings.create_preference_store(),
        pasteboard=get_pasteboard(),
        notifier=notifier,
        storage_key=settings.storage_key,
    )
    hub = MenuEventHub()
    monitor = ClipboardAvailabilityMonitor(
        store, hub, RumpsScheduler(), settle_delay=settings.menu_settle_delay)
    app_settings = AppSettings(LoginItemManager(bundle_id=settings.bundle_id))
    return ClipJointApp(store, app_settings, notifier, hub, monitor)
