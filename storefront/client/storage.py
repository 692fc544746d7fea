"""Browser-side key/value storage for the cart and checkout snapshots.

``MemoryStorage`` lives for one process; ``RedisStorage`` keeps a
browser session's keys in redis so they survive the page reload that
happens while the buyer approves payment in the PayPal window.
"""
from typing import Dict, Optional, Protocol

from redis import Redis

from storefront.core.config import settings


class Storage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class RedisStorage:
    def __init__(self, client: Redis, session_id: str):
        self.client = client
        self.session_id = session_id

    @classmethod
    def from_url(cls, session_id: str, url: Optional[str] = None) -> "RedisStorage":
        return cls(Redis.from_url(url or settings.REDIS_URL, decode_responses=True), session_id)

    def _key(self, key: str) -> str:
        return f"storage:{self.session_id}:{key}"

    def get_item(self, key: str) -> Optional[str]:
        return self.client.get(self._key(key))

    def set_item(self, key: str, value: str) -> None:
        self.client.set(self._key(key), value)

    def remove_item(self, key: str) -> None:
        self.client.delete(self._key(key))
