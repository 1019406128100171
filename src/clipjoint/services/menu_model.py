"""What the status menu shows, computed without any UI toolkit.

``build_menu_model`` turns the store, the display geometry and the last
known clipboard state into plain rows; the menu bar app only renders them.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from clipjoint.services.menu_layout import partition_clips, top_level_clip_row_budget
from clipjoint.utils.screens import Display, active_visible_height
from clipjoint.utils.text_formatter import MENU_EMPTY_PLACEHOLDER, preview

TOOLTIP_PREVIEW_LIMIT = 240
EDITOR_PREVIEW_LIMIT = 90


@dataclass(frozen=True)
class ClipRow:
    clip_id: str
    label: str
    tooltip: str


@dataclass(frozen=True)
class EditorRow:
    clip_id: str
    label: str
    preview: str
    can_move_up: bool
    can_move_down: bool


@dataclass(frozen=True)
class MenuModel:
    budget: int
    primary: List[ClipRow] = field(default_factory=list)
    overflow: List[ClipRow] = field(default_factory=list)
    add_clip_enabled: bool = False
    add_blank_enabled: bool = False
    editor_rows: List[EditorRow] = field(default_factory=list)

    @property
    def show_empty_row(self) -> bool:
        return not self.primary and not self.overflow


def layout_budget(displays: Sequence[Display], pointer: Optional[Tuple[float, float]]) -> int:
    """Top-level clip rows that fit on the display under the pointer."""
    return top_level_clip_row_budget(active_visible_height(displays, pointer))


def build_menu_model(
    store,
    displays: Sequence[Display],
    pointer: Optional[Tuple[float, float]],
    has_clipboard_text: bool,
) -> MenuModel:
    budget = layout_budget(displays, pointer)
    clips = store.clips
    sections = partition_clips(clips, budget)

    def clip_row(clip) -> ClipRow:
        return ClipRow(
            clip_id=clip.id,
            label=clip.menu_label,
            tooltip=preview(clip.text, TOOLTIP_PREVIEW_LIMIT, empty_placeholder=MENU_EMPTY_PLACEHOLDER),
        )

    editor_rows = [
        EditorRow(
            clip_id=clip.id,
            label=clip.menu_label,
            preview=preview(clip.text, EDITOR_PREVIEW_LIMIT),
            can_move_up=store.can_move_clip(clip.id, -1),
            can_move_down=store.can_move_clip(clip.id, 1),
        )
        for clip in clips
    ]

    can_add = store.can_add_another_clip
    return MenuModel(
        budget=budget,
        primary=[clip_row(clip) for clip in sections.primary],
        overflow=[clip_row(clip) for clip in sections.overflow],
        add_clip_enabled=has_clipboard_text and can_add,
        add_blank_enabled=can_add,
        editor_rows=editor_rows,
    )
