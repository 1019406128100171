from clipjoint.clipboard.base import ClipboardPayload, Pasteboard
from clipjoint.clipboard.factory import get_pasteboard
from clipjoint.clipboard.normalizer import from_clipboard_payload, normalize, plain_text_from_pasteboard

__all__ = [
    'ClipboardPayload',
    'Pasteboard',
    'get_pasteboard',
    'normalize',
    'from_clipboard_payload',
    'plain_text_from_pasteboard',
]
