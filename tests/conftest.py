from typing import List

import pytest

from clipjoint.clipboard.memory import MemoryPasteboard
from clipjoint.database.preferences import MemoryPreferenceStore
from clipjoint.services.clip_store import ClipStore
from clipjoint.services.notifier import Notifier


class RecordingNotifier(Notifier):

    def __init__(self):
        self.messages: List[str] = []

    def show(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def pasteboard():
    return MemoryPasteboard()


@pytest.fixture
def preferences():
    return MemoryPreferenceStore()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def make_store(preferences, pasteboard, notifier):
    def factory(**kwargs):
        kwargs.setdefault("preferences", preferences)
        kwargs.setdefault("pasteboard", pasteboard)
        kwargs.setdefault("notifier", notifier)
        return ClipStore(**kwargs)
    return factory
