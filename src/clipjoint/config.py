import logging
import os
import platform
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from clipjoint.services.clip_store import DEFAULT_STORAGE_KEY
from clipjoint.services.login_items import DEFAULT_BUNDLE_ID
from clipjoint.services.menu_events import DEFAULT_SETTLE_DELAY

BACKENDS = ("defaults", "file", "redis", "memory")


def _default_backend() -> str:
    return "defaults" if platform.system() == "Darwin" else "file"


def _to_float(name: str, value: Optional[str], default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


@dataclass(frozen=True)
class Settings:
    preferences_backend: str = "file"
    storage_key: str = DEFAULT_STORAGE_KEY
    preferences_path: Path = Path.home() / ".clipjoint" / "preferences.json"
    redis_uri: str = "redis://localhost:6379/0"
    log_level: str = "INFO"
    menu_settle_delay: float = DEFAULT_SETTLE_DELAY
    bundle_id: str = DEFAULT_BUNDLE_ID

    def __post_init__(self):
        if self.preferences_backend not in BACKENDS:
            raise ValueError(
                f"Unsupported preferences backend: {self.preferences_backend!r}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    @classmethod
    def from_env(cls, *, env_path: Optional[Path] = None) -> "Settings":
        load_dotenv(env_path)

        path_raw = os.getenv("CLIPJOINT_PREFERENCES_PATH")
        return cls(
            preferences_backend=os.getenv("CLIPJOINT_PREFERENCES_BACKEND") or _default_backend(),
            storage_key=os.getenv("CLIPJOINT_STORAGE_KEY") or cls.storage_key,
            preferences_path=Path(path_raw).expanduser() if path_raw else cls.preferences_path,
            redis_uri=os.getenv("CLIPJOINT_REDIS_URI") or cls.redis_uri,
            log_level=os.getenv("CLIPJOINT_LOG_LEVEL") or cls.log_level,
            menu_settle_delay=_to_float(
                "CLIPJOINT_MENU_SETTLE_DELAY", os.getenv("CLIPJOINT_MENU_SETTLE_DELAY"), cls.menu_settle_delay),
            bundle_id=os.getenv("CLIPJOINT_BUNDLE_ID") or cls.bundle_id,
        )

    def override(self, **changes) -> "Settings":
        """Copy with the non-``None`` values in ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def create_preference_store(self):
        if self.preferences_backend == "defaults":
            from clipjoint.database.preferences import UserDefaultsStore
            return UserDefaultsStore()
        if self.preferences_backend == "redis":
            from clipjoint.database.redis_store import RedisConfig, RedisPreferenceStore
            return RedisPreferenceStore(config=RedisConfig(uri=self.redis_uri))
        if self.preferences_backend == "memory":
            from clipjoint.database.preferences import MemoryPreferenceStore
            return MemoryPreferenceStore()

        from clipjoint.database.preferences import JsonFilePreferenceStore
        return JsonFilePreferenceStore(self.preferences_path)
