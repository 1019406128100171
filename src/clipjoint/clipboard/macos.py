import logging
from typing import Optional

try:
    from AppKit import (
        NSAttributedString,
        NSDocumentTypeDocumentAttribute,
        NSHTMLTextDocumentType,
        NSPasteboard,
        NSPasteboardTypeHTML,
        NSPasteboardTypeRTF,
        NSPasteboardTypeString,
        NSRTFTextDocumentType,
    )
    from Foundation import NSData
    HAS_APPKIT = True
except ImportError:
    HAS_APPKIT = False

from clipjoint.clipboard.base import ClipboardPayload, Pasteboard

logger = logging.getLogger(__name__)


class MacOSPasteboard(Pasteboard):
    """Wraps ``NSPasteboard.generalPasteboard()``."""

    def __init__(self, pasteboard=None):
        if pasteboard is None and HAS_APPKIT:
            pasteboard = NSPasteboard.generalPasteboard()
        self._pasteboard = pasteboard

    @property
    def change_count(self) -> int:
        if self._pasteboard is None:
            return 0
        return int(self._pasteboard.changeCount())

    def _read_payload(self) -> ClipboardPayload:
        if self._pasteboard is None:
            return ClipboardPayload()

        return ClipboardPayload(
            plain=self._get_text(),
            rich=self._get_rich_text(),
            rtf=self._get_data(NSPasteboardTypeRTF),
            html=self._get_data(NSPasteboardTypeHTML),
        )

    def _get_text(self) -> Optional[str]:
        try:
            text = self._pasteboard.stringForType_(NSPasteboardTypeString)
            if text:
                return str(text)
        except Exception:
            logger.debug("Pasteboard has no readable plain text", exc_info=True)
        return None

    def _get_rich_text(self) -> Optional[str]:
        try:
            objects = self._pasteboard.readObjectsForClasses_options_(
                [NSAttributedString], None)
            if objects:
                return str(objects[0].string())
        except Exception:
            logger.debug("Pasteboard has no readable attributed string", exc_info=True)
        return None

    def _get_data(self, pb_type) -> Optional[bytes]:
        try:
            data = self._pasteboard.dataForType_(pb_type)
            if data:
                return bytes(data)
        except Exception:
            logger.debug("Pasteboard has no %s data", pb_type, exc_info=True)
        return None

    def _write_string(self, text: str) -> bool:
        if self._pasteboard is None:
            return False

        self._pasteboard.clearContents()
        return bool(self._pasteboard.setString_forType_(text, NSPasteboardTypeString))

    def decode_attributed_text(self, data: bytes, document_type: str) -> Optional[str]:
        if not HAS_APPKIT:
            return None

        doc_types = {
            "rtf": NSRTFTextDocumentType,
            "html": NSHTMLTextDocumentType,
        }
        if document_type not in doc_types:
            return None

        ns_data = NSData.dataWithBytes_length_(data, len(data))
        options = {NSDocumentTypeDocumentAttribute: doc_types[document_type]}
        attributed, _attributes, error = NSAttributedString.alloc().initWithData_options_documentAttributes_error_(
            ns_data, options, None, None)
        if attributed is None:
            logger.debug("Could not decode %s pasteboard data: %s", document_type, error)
            return None
        return str(attributed.string())
