from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

try:
    from AppKit import NSEvent, NSScreen
    HAS_APPKIT = True
except ImportError:
    HAS_APPKIT = False

DEFAULT_VISIBLE_HEIGHT = 900.0


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    def contains(self, point: Tuple[float, float]) -> bool:
        px, py = point
        return self.x <= px < self.x + self.width and self.y <= py < self.y + self.height


@dataclass(frozen=True)
class Display:
    frame: Rect
    visible_frame: Rect


def active_display(displays: Sequence[Display], pointer: Optional[Tuple[float, float]]) -> Optional[Display]:
    """Display under the pointer, else the first (primary) display."""
    if pointer is not None:
        for display in displays:
            if display.frame.contains(pointer):
                return display
    return displays[0] if displays else None


def active_visible_height(
    displays: Sequence[Display],
    pointer: Optional[Tuple[float, float]],
    default: float = DEFAULT_VISIBLE_HEIGHT,
) -> float:
    display = active_display(displays, pointer)
    if display is None:
        return default
    return display.visible_frame.height


def _rect(ns_rect) -> Rect:
    return Rect(ns_rect.origin.x, ns_rect.origin.y, ns_rect.size.width, ns_rect.size.height)


def system_displays() -> List[Display]:
    if not HAS_APPKIT:
        return []

    displays = [Display(_rect(s.frame()), _rect(s.visibleFrame())) for s in NSScreen.screens()]
    main = NSScreen.mainScreen()
    if main is not None:
        # ``NSScreen.mainScreen`` is the fallback when the pointer is off-screen.
        main_display = Display(_rect(main.frame()), _rect(main.visibleFrame()))
        displays = [main_display] + [d for d in displays if d != main_display]
    return displays


def pointer_location() -> Optional[Tuple[float, float]]:
    if not HAS_APPKIT:
        return None
    point = NSEvent.mouseLocation()
    return point.x, point.y
