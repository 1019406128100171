#!/usr/bin/env python3

import argparse
import logging
import sys
from typing import List, Optional

from clipjoint.clipboard import get_pasteboard
from clipjoint.config import BACKENDS, Settings
from clipjoint.models.clip import MENU_LABEL_CHARACTER_LIMIT, encode_clips
from clipjoint.services.clip_store import ClipStore
from clipjoint.services.notifier import LoggingNotifier
from clipjoint.utils.text_formatter import preview

logger = logging.getLogger(__name__)


def _open_store(settings: Settings, headless: bool = False) -> ClipStore:
    return ClipStore(
        preferences=settings.create_preference_store(),
        pasteboard=get_pasteboard(headless=headless),
        notifier=LoggingNotifier(),
        storage_key=settings.storage_key,
    )


def _clip_id_at(store: ClipStore, index: int) -> Optional[str]:
    clips = store.clips
    if not 1 <= index <= len(clips):
        logger.error(f"No clip at position {index} (have {len(clips)})")
        return None
    return clips[index - 1].id


def cmd_run(settings: Settings, args: argparse.Namespace) -> int:
    from clipjoint.app import build_app

    build_app(settings).run()
    return 0


def cmd_list(settings: Settings, args: argparse.Namespace) -> int:
    store = _open_store(settings, headless=True)
    width = len(str(len(store.clips)))
    for position, clip in enumerate(store.clips, start=1):
        label = clip.menu_label.ljust(MENU_LABEL_CHARACTER_LIMIT + 1)
        print(f"{position:>{width}}  {label}  {preview(clip.text, 60)}")
    if not store.has_clips:
        print("No saved clips")
    return 0


def cmd_add(settings: Settings, args: argparse.Namespace) -> int:
    if args.from_clipboard:
        store = _open_store(settings)
        return 0 if store.add_clipboard_clip() else 1

    store = _open_store(settings, headless=True)
    text = args.text if args.text is not None else sys.stdin.read()
    if store.add_clip(text):
        logger.info("Clip added")
        return 0
    if store.can_add_another_clip:
        logger.error("Nothing to add: text is empty")
    return 1


def cmd_copy(settings: Settings, args: argparse.Namespace) -> int:
    store = _open_store(settings)
    clip_id = _clip_id_at(store, args.index)
    if clip_id is None:
        return 1
    store.copy_clip(store.clip(clip_id))
    return 0


def cmd_delete(settings: Settings, args: argparse.Namespace) -> int:
    store = _open_store(settings, headless=True)
    clip_id = _clip_id_at(store, args.index)
    if clip_id is None:
        return 1
    store.delete_clip(clip_id)
    return 0


def cmd_rename(settings: Settings, args: argparse.Namespace) -> int:
    store = _open_store(settings, headless=True)
    clip_id = _clip_id_at(store, args.index)
    if clip_id is None:
        return 1
    store.update_name(clip_id, args.name)
    return 0


def cmd_move(settings: Settings, args: argparse.Namespace) -> int:
    store = _open_store(settings, headless=True)
    clip_id = _clip_id_at(store, args.index)
    if clip_id is None:
        return 1

    direction = -1 if args.direction == "up" else 1
    if not store.can_move_clip(clip_id, direction):
        logger.error(f"Clip {args.index} cannot move {args.direction}")
        return 1
    store.move_clip(clip_id, direction)
    return 0


def cmd_export(settings: Settings, args: argparse.Namespace) -> int:
    store = _open_store(settings, headless=True)
    print(encode_clips(list(store.clips)).decode("utf-8"))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clipjoint",
        description="Menu bar keeper for short text clips",
    )
    parser.add_argument("--backend", choices=BACKENDS,
                        help="Preference store backend")
    parser.add_argument("--storage-key", help="Preference entry holding the clips")
    parser.add_argument("--log-level", help="Logging level (default INFO)")

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Start the menu bar app (default)")
    subparsers.add_parser("list", help="List saved clips")

    add = subparsers.add_parser("add", help="Add a clip from text, stdin or the clipboard")
    add.add_argument("text", nargs="?", help="Clip text (reads stdin when omitted)")
    add.add_argument("--from-clipboard", action="store_true",
                     help="Import the current clipboard text")

    copy = subparsers.add_parser("copy", help="Copy a clip to the clipboard")
    copy.add_argument("index", type=int, help="1-based clip position")

    delete = subparsers.add_parser("delete", help="Delete a clip")
    delete.add_argument("index", type=int, help="1-based clip position")

    rename = subparsers.add_parser("rename", help="Rename a clip")
    rename.add_argument("index", type=int, help="1-based clip position")
    rename.add_argument("name", help="New clip name")

    move = subparsers.add_parser("move", help="Swap a clip with its neighbour")
    move.add_argument("index", type=int, help="1-based clip position")
    move.add_argument("direction", choices=("up", "down"))

    subparsers.add_parser("export", help="Print the stored clips as JSON")
    return parser


COMMANDS = {
    "run": cmd_run,
    "list": cmd_list,
    "add": cmd_add,
    "copy": cmd_copy,
    "delete": cmd_delete,
    "rename": cmd_rename,
    "move": cmd_move,
    "export": cmd_export,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env().override(
            preferences_backend=args.backend,
            storage_key=args.storage_key,
            log_level=args.log_level,
        )
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(level=settings.log_level.upper(),
                        format="[%(levelname)s] %(message)s")

    command = COMMANDS[args.command or "run"]
    try:
        return command(settings, args)
    except NotImplementedError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
