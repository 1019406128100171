import platform

from clipjoint.clipboard.base import Pasteboard


def get_pasteboard(headless: bool = False) -> Pasteboard:
    if headless:
        from clipjoint.clipboard.memory import MemoryPasteboard
        return MemoryPasteboard()

    system = platform.system()

    if system == "Darwin":
        from clipjoint.clipboard.macos import HAS_APPKIT, MacOSPasteboard
        if not HAS_APPKIT:
            raise NotImplementedError(
                "pyobjc-framework-Cocoa is required for the macOS pasteboard")
        return MacOSPasteboard()
    else:
        raise NotImplementedError(f"Platform '{system}' is not supported")
