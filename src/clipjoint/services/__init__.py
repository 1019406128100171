"""Service layer for ClipJoint."""

from .clip_store import ClipStore
from .notifier import LoggingNotifier, Notifier

__all__ = ["ClipStore", "LoggingNotifier", "Notifier"]
