"""Persistent source of truth for clips.

The store owns the ordered clip list, writes it back to the preference store
after every mutation and caches the last clipboard read keyed by the
pasteboard change counter. All access is expected from the UI thread.
"""

import logging
from typing import Callable, List, Optional, Tuple

from clipjoint.clipboard.base import Pasteboard
from clipjoint.clipboard.normalizer import normalize, plain_text_from_pasteboard
from clipjoint.database.preferences import PreferenceStore
from clipjoint.models.clip import (
    CLIP_TEXT_CHARACTER_LIMIT,
    MENU_LABEL_CHARACTER_LIMIT,
    Clip,
    decode_clips,
    encode_clips,
)
from clipjoint.services.notifier import LoggingNotifier, Notifier
from clipjoint.utils.text_formatter import (
    bounded,
    bounded_single_line_title,
    normalized_line_breaks,
    plain_prefix,
)

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "clipjoint.savedClips.v1"
MAXIMUM_CLIP_COUNT = 300


def default_clips() -> List[Clip]:
    return [
        Clip(
            name="Bob's your uncle",
            text="Bob's your uncle",
        ),
        Clip(
            name="Joe Bagodonuts",
            text="Joe Bagodonuts",
        ),
        Clip(
            name="The quick brown fox jumps over the lazy dog",
            text="The quick brown fox jumps over the lazy dog, or something like that. "
                 "Honestly, feels kind of mean to shame the dog like this.",
        ),
    ]


def sanitized_clip(clip: Clip) -> Clip:
    return clip.model_copy(update={
        "name": bounded_single_line_title(clip.name, MENU_LABEL_CHARACTER_LIMIT),
        "text": bounded(clip.text, CLIP_TEXT_CHARACTER_LIMIT),
    })


class ClipStore:

    def __init__(
        self,
        preferences: PreferenceStore,
        pasteboard: Pasteboard,
        notifier: Optional[Notifier] = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        self.preferences = preferences
        self.pasteboard = pasteboard
        self.notifier = notifier or LoggingNotifier()
        self.storage_key = storage_key
        self._observers: List[Callable[[], None]] = []
        self._clipboard_cache: Tuple[int, Optional[str]] = (-1, None)

        loaded = self._load_clips()
        if loaded is None:
            loaded = default_clips()
        clips = [sanitized_clip(clip) for clip in loaded]
        if len(clips) > MAXIMUM_CLIP_COUNT:
            logger.warning(
                "Dropping %d oldest clips over the limit of %d",
                len(clips) - MAXIMUM_CLIP_COUNT, MAXIMUM_CLIP_COUNT)
            clips = clips[-MAXIMUM_CLIP_COUNT:]
        self._clips: List[Clip] = clips
        self._persist()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def clips(self) -> Tuple[Clip, ...]:
        return tuple(self._clips)

    @property
    def has_clips(self) -> bool:
        return bool(self._clips)

    @property
    def maximum_clip_count(self) -> int:
        return MAXIMUM_CLIP_COUNT

    @property
    def can_add_another_clip(self) -> bool:
        return len(self._clips) < MAXIMUM_CLIP_COUNT

    def clip(self, clip_id: str) -> Optional[Clip]:
        return next((c for c in self._clips if c.id == clip_id), None)

    def _index(self, clip_id: str) -> Optional[int]:
        for index, clip in enumerate(self._clips):
            if clip.id == clip_id:
                return index
        return None

    def subscribe(self, callback: Callable[[], None]) -> None:
        """Register ``callback`` to run after every mutation."""
        self._observers.append(callback)

    # ------------------------------------------------------------------
    # Clipboard
    # ------------------------------------------------------------------
    def copy_clip(self, clip: Clip) -> None:
        if self.pasteboard.set_string(clip.text):
            self.notifier.show("Copied")
        else:
            logger.warning("Could not copy clip %s to the clipboard", clip.id)

    def add_clipboard_clip(self) -> bool:
        clipboard_text = self._cached_clipboard_text(force_refresh=True)
        if clipboard_text is None:
            self.notifier.show("Clipboard has no text")
            return False

        return self.add_clip(clipboard_text)

    def can_import_clipboard_text(self, force_refresh: bool = False) -> bool:
        return self._cached_clipboard_text(force_refresh) is not None

    def _cached_clipboard_text(self, force_refresh: bool) -> Optional[str]:
        change_count = self.pasteboard.change_count
        cached_count, cached_text = self._clipboard_cache
        if not force_refresh and cached_count == change_count:
            return cached_text

        text = plain_text_from_pasteboard(self.pasteboard)
        self._clipboard_cache = (change_count, text)
        return text

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def add_blank_clip(self) -> Optional[str]:
        if not self.can_add_another_clip:
            self.notifier.show("Clip limit reached")
            return None

        clip = Clip(name="New Clip", text="")
        self._clips.append(clip)
        logger.debug("Added blank clip %s", clip.id)
        self._did_change()
        return clip.id

    def add_clip(self, text: str) -> bool:
        if not self.can_add_another_clip:
            self.notifier.show("Clip limit reached")
            return False

        normalized_text = normalize(text)
        if normalized_text is None:
            return False

        bounded_text = bounded(normalized_text, CLIP_TEXT_CHARACTER_LIMIT)
        clip_name = plain_prefix(bounded_text, MENU_LABEL_CHARACTER_LIMIT)
        clip = Clip(name=clip_name, text=bounded_text)
        self._clips.append(clip)
        logger.debug("Added clip %s (%d chars)", clip.id, len(bounded_text))
        self._did_change()
        return True

    def update_name(self, clip_id: str, name: str) -> None:
        index = self._index(clip_id)
        if index is None:
            return

        self._clips[index].name = bounded_single_line_title(name, MENU_LABEL_CHARACTER_LIMIT)
        self._did_change()

    def update_text(self, clip_id: str, text: str) -> None:
        index = self._index(clip_id)
        if index is None:
            return

        normalized = normalized_line_breaks(text)
        self._clips[index].text = bounded(normalized, CLIP_TEXT_CHARACTER_LIMIT)
        self._did_change()

    def delete_clip(self, clip_id: str) -> None:
        index = self._index(clip_id)
        if index is None:
            return

        del self._clips[index]
        logger.debug("Deleted clip %s", clip_id)
        self._did_change()

    def can_move_clip(self, clip_id: str, direction: int) -> bool:
        index = self._index(clip_id)
        if index is None:
            return False

        return 0 <= index + direction < len(self._clips)

    def move_clip(self, clip_id: str, direction: int) -> None:
        index = self._index(clip_id)
        if index is None:
            return

        destination = index + direction
        if not 0 <= destination < len(self._clips):
            return

        clips = self._clips
        clips[index], clips[destination] = clips[destination], clips[index]
        self._did_change()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def _did_change(self) -> None:
        self._persist()
        for callback in list(self._observers):
            try:
                callback()
            except Exception:
                logger.exception("Error while notifying clip store observer")

    def _persist(self) -> None:
        try:
            self.preferences.set_data(self.storage_key, encode_clips(self._clips))
        except Exception as e:
            logger.error(f"Failed to persist clips: {e}")

    def _load_clips(self) -> Optional[List[Clip]]:
        try:
            data = self.preferences.get_data(self.storage_key)
        except Exception as e:
            logger.error(f"Failed to read saved clips: {e}")
            return None

        if data is None:
            logger.info("No saved clips found, seeding defaults")
            return None

        clips = decode_clips(data)
        if clips is None:
            logger.warning("Saved clips could not be decoded, seeding defaults")
        return clips
