"""How many clips fit as top-level menu rows before spilling into "More"."""

import math
from dataclasses import dataclass, field
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")

TOP_LEVEL_MENU_SCREEN_FRACTION = 3.0 / 4.0
MENU_ITEM_HEIGHT_ESTIMATE = 22.0
TOP_LEVEL_MENU_FIXED_ITEM_COUNT_ESTIMATE = 8
MENU_VERTICAL_PADDING_ESTIMATE = 44.0


@dataclass(frozen=True)
class MenuSections(Generic[T]):
    primary: List[T]
    overflow: List[T] = field(default_factory=list)


def top_level_clip_row_budget(
    visible_height: float,
    fraction: float = TOP_LEVEL_MENU_SCREEN_FRACTION,
    row_height: float = MENU_ITEM_HEIGHT_ESTIMATE,
    fixed_row_count: int = TOP_LEVEL_MENU_FIXED_ITEM_COUNT_ESTIMATE,
    padding: float = MENU_VERTICAL_PADDING_ESTIMATE,
) -> int:
    max_menu_height = visible_height * fraction
    fixed_height = fixed_row_count * row_height + padding
    clip_rows = int(math.floor(max(0.0, max_menu_height - fixed_height) / row_height))
    return max(1, clip_rows)


def partition_clips(clips: Sequence[T], budget: int) -> MenuSections[T]:
    if len(clips) <= budget:
        return MenuSections(primary=list(clips))

    # One top-level row is taken by the "More" submenu.
    primary_count = max(0, budget - 1)
    return MenuSections(primary=list(clips[:primary_count]), overflow=list(clips[primary_count:]))
