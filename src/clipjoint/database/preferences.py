import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

try:
    from Foundation import NSData, NSUserDefaults
    HAS_FOUNDATION = True
except ImportError:
    HAS_FOUNDATION = False

logger = logging.getLogger(__name__)


class PreferenceStore(ABC):
    """Named byte entries, modelled on the user defaults database."""

    @abstractmethod
    def get_data(self, key: str) -> Optional[bytes]:
        pass

    @abstractmethod
    def set_data(self, key: str, data: bytes) -> None:
        pass


class MemoryPreferenceStore(PreferenceStore):

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self.values: Dict[str, bytes] = dict(initial or {})
        self.writes = 0

    def get_data(self, key: str) -> Optional[bytes]:
        return self.values.get(key)

    def set_data(self, key: str, data: bytes) -> None:
        self.values[key] = bytes(data)
        self.writes += 1


class JsonFilePreferenceStore(PreferenceStore):
    """Stores every entry as a UTF-8 string inside one JSON object file."""

    def __init__(self, path: Optional[Path] = None):
        if path is None:
            path = Path.home() / ".clipjoint" / "preferences.json"
        self.path = path

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get_data(self, key: str) -> Optional[bytes]:
        value = self._load().get(key)
        if not isinstance(value, str):
            return None
        return value.encode("utf-8")

    def set_data(self, key: str, data: bytes) -> None:
        values = self._load()
        values[key] = data.decode("utf-8")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(values, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)


class UserDefaultsStore(PreferenceStore):
    """``NSUserDefaults`` backed store; values are written as ``NSData``."""

    def __init__(self, defaults=None):
        if defaults is None:
            if not HAS_FOUNDATION:
                raise NotImplementedError(
                    "pyobjc-framework-Cocoa is required for NSUserDefaults")
            defaults = NSUserDefaults.standardUserDefaults()
        self.defaults = defaults

    def get_data(self, key: str) -> Optional[bytes]:
        data = self.defaults.dataForKey_(key)
        if data is None:
            return None
        return bytes(data)

    def set_data(self, key: str, data: bytes) -> None:
        self.defaults.setObject_forKey_(
            NSData.dataWithBytes_length_(data, len(data)), key)
