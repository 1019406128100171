from dataclasses import dataclass
from typing import Optional

import redis

from clipjoint.database.preferences import PreferenceStore


@dataclass(frozen=True)
class RedisConfig:
    uri: str = "redis://localhost:6379/0"
    namespace: str = "clipjoint"

    def create_client(self) -> redis.Redis:
        # No connection is made until the first command.
        return redis.Redis.from_url(self.uri, decode_responses=False)


class RedisPreferenceStore(PreferenceStore):
    """Keeps preference entries as plain Redis strings under ``<namespace>:<key>``."""

    def __init__(self, client: Optional[redis.Redis] = None, config: Optional[RedisConfig] = None):
        self.config = config or RedisConfig()
        self.client = client if client is not None else self.config.create_client()

    def _key(self, key: str) -> str:
        return f"{self.config.namespace}:{key}"

    def get_data(self, key: str) -> Optional[bytes]:
        value = self.client.get(self._key(key))
        if value is None:
            return None
        if isinstance(value, str):
            return value.encode("utf-8")
        return bytes(value)

    def set_data(self, key: str, data: bytes) -> None:
        self.client.set(self._key(key), data)

    def close(self) -> None:
        self.client.close()
