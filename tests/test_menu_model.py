from clipjoint.models.clip import Clip, encode_clips
from clipjoint.services.clip_store import DEFAULT_STORAGE_KEY, MAXIMUM_CLIP_COUNT
from clipjoint.services.menu_model import build_menu_model, layout_budget
from clipjoint.utils.screens import Display, Rect

LAPTOP = Display(frame=Rect(0, 0, 1440, 900), visible_frame=Rect(0, 0, 1440, 875))
MONITOR = Display(frame=Rect(1440, 0, 1920, 1200), visible_frame=Rect(1440, 0, 1920, 1175))
DISPLAYS = [LAPTOP, MONITOR]
ON_LAPTOP = (100, 100)
ON_MONITOR = (2000, 500)


def seeded_store(make_store, preferences, count):
    clips = [Clip(name=f"clip {i}", text=f"text {i}") for i in range(count)]
    preferences.set_data(DEFAULT_STORAGE_KEY, encode_clips(clips))
    return make_store()


def test_budget_follows_display_under_pointer():
    assert layout_budget(DISPLAYS, ON_LAPTOP) == 19
    assert layout_budget(DISPLAYS, ON_MONITOR) == 30
    assert layout_budget([], None) == 20


def test_taller_display_shows_more_top_level_clips(make_store, preferences):
    store = seeded_store(make_store, preferences, 50)

    laptop = build_menu_model(store, DISPLAYS, ON_LAPTOP, has_clipboard_text=True)
    monitor = build_menu_model(store, DISPLAYS, ON_MONITOR, has_clipboard_text=True)

    assert len(laptop.primary) == 18
    assert len(laptop.overflow) == 32
    assert len(monitor.primary) == 29
    assert len(monitor.overflow) == 21
    assert [row.label for row in monitor.primary[:2]] == ["clip 0", "clip 1"]
    assert monitor.overflow[-1].label == "clip 49"


def test_clips_that_fit_have_no_overflow(make_store):
    model = build_menu_model(make_store(), DISPLAYS, ON_LAPTOP, has_clipboard_text=True)

    assert [row.label for row in model.primary] == [
        "Bob's your uncle", "Joe Bagodonuts", "The quick brown fox jumps"]
    assert model.overflow == []
    assert not model.show_empty_row


def test_empty_store_shows_placeholder_row(make_store, preferences):
    store = seeded_store(make_store, preferences, 0)

    model = build_menu_model(store, DISPLAYS, ON_LAPTOP, has_clipboard_text=True)

    assert model.show_empty_row
    assert model.primary == [] and model.overflow == []
    assert model.editor_rows == []
    assert model.add_blank_enabled


def test_tooltips_and_editor_previews(make_store, preferences):
    store = seeded_store(make_store, preferences, 0)
    store.add_clip("word " * 100)
    store.add_blank_clip()

    model = build_menu_model(store, DISPLAYS, ON_LAPTOP, has_clipboard_text=False)

    long_row, blank_row = model.primary
    assert long_row.tooltip.endswith("…")
    assert len(long_row.tooltip) == 241
    assert blank_row.tooltip == "(Empty Clip)"
    assert len(model.editor_rows[0].preview) == 91
    assert model.editor_rows[1].preview == "No text yet"


def test_move_enablement_per_editor_row(make_store):
    model = build_menu_model(make_store(), DISPLAYS, ON_LAPTOP, has_clipboard_text=True)

    moves = [(row.can_move_up, row.can_move_down) for row in model.editor_rows]
    assert moves == [(False, True), (True, True), (True, False)]


def test_add_clip_needs_clipboard_text_and_capacity(make_store, preferences):
    store = make_store()
    assert build_menu_model(store, DISPLAYS, ON_LAPTOP, has_clipboard_text=True).add_clip_enabled
    assert not build_menu_model(store, DISPLAYS, ON_LAPTOP, has_clipboard_text=False).add_clip_enabled

    full = seeded_store(make_store, preferences, MAXIMUM_CLIP_COUNT)
    model = build_menu_model(full, DISPLAYS, ON_LAPTOP, has_clipboard_text=True)
    assert not model.add_clip_enabled
    assert not model.add_blank_enabled
