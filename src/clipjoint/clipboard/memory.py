from typing import Optional

from clipjoint.clipboard.base import AttributedTextDecoder, ClipboardPayload, Pasteboard


class MemoryPasteboard(Pasteboard):
    """Process-local pasteboard used by the headless CLI and the tests.

    Every content change bumps ``change_count`` the way the system pasteboard
    does.
    """

    def __init__(self, decoder: Optional[AttributedTextDecoder] = None):
        self._payload = ClipboardPayload()
        self._change_count = 0
        self._decoder = decoder
        self.reads = 0

    @property
    def change_count(self) -> int:
        return self._change_count

    def set_payload(self, payload: ClipboardPayload) -> None:
        self._payload = payload
        self._change_count += 1

    def _read_payload(self) -> ClipboardPayload:
        self.reads += 1
        return self._payload

    def _write_string(self, text: str) -> bool:
        self.set_payload(ClipboardPayload(plain=text))
        return True

    def decode_attributed_text(self, data: bytes, document_type: str) -> Optional[str]:
        if self._decoder is None:
            return None
        return self._decoder(data, document_type)
