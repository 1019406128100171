"""Turns pasteboard payloads into plain, normalized text for clip storage."""

import logging
from typing import Optional

from clipjoint.clipboard.base import AttributedTextDecoder, ClipboardPayload, Pasteboard
from clipjoint.utils.text_formatter import normalized_line_breaks

logger = logging.getLogger(__name__)


def normalize(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None

    normalized = normalized_line_breaks(text).strip()
    return normalized or None


def _decode(decoder: Optional[AttributedTextDecoder], data: Optional[bytes], document_type: str) -> Optional[str]:
    if not data or decoder is None:
        return None
    try:
        return decoder(data, document_type)
    except Exception:
        logger.debug("Failed to decode %s clipboard data", document_type, exc_info=True)
        return None


def from_clipboard_payload(
    payload: ClipboardPayload,
    decoder: Optional[AttributedTextDecoder] = None,
) -> Optional[str]:
    """Return the first representation that normalizes to non-empty text.

    Order: plain text, rich text, RTF, HTML. Formatting is always discarded.
    The byte formats are only consulted when a ``decoder`` is available.
    """
    candidates = (
        lambda: payload.plain,
        lambda: payload.rich,
        lambda: _decode(decoder, payload.rtf, "rtf"),
        lambda: _decode(decoder, payload.html, "html"),
    )
    for candidate in candidates:
        normalized = normalize(candidate())
        if normalized is not None:
            return normalized
    return None


def plain_text_from_pasteboard(pasteboard: Pasteboard) -> Optional[str]:
    return from_clipboard_payload(
        pasteboard.read_payload(), pasteboard.decode_attributed_text)
