import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

# (data, document_type) -> plain text; document_type is "rtf" or "html".
AttributedTextDecoder = Callable[[bytes, str], Optional[str]]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClipboardPayload:
    """Representations found on the pasteboard for its current contents."""
    plain: Optional[str] = None
    rich: Optional[str] = None
    rtf: Optional[bytes] = None
    html: Optional[bytes] = None

    @property
    def is_empty(self) -> bool:
        return not any((self.plain, self.rich, self.rtf, self.html))


class Pasteboard(ABC):

    @property
    @abstractmethod
    def change_count(self) -> int:
        pass

    @abstractmethod
    def _read_payload(self) -> ClipboardPayload:
        pass

    @abstractmethod
    def _write_string(self, text: str) -> bool:
        pass

    def read_payload(self) -> ClipboardPayload:
        return self._read_payload()

    def set_string(self, text: str) -> bool:
        """Clear the pasteboard, then set ``text`` as its plain text."""
        try:
            return self._write_string(text)
        except Exception:
            logger.exception("Failed to write text to the pasteboard")
            return False

    def decode_attributed_text(self, data: bytes, document_type: str) -> Optional[str]:
        return None
