import secrets
from typing import MutableMapping, Optional

from loguru import logger

from .models import CsrfToken


class Guard:
    """Session-backed CSRF token provider.

    Each ``generate_token`` call stores a fresh name/value pair in
    ``storage`` (oldest pairs are evicted past ``storage_limit``).
    ``validate_token`` consumes the pair unless ``persistent`` is set.
    """

    def __init__(
        self,
        prefix: str = "csrf",
        storage: Optional[MutableMapping[str, str]] = None,
        storage_limit: int = 200,
        strength: int = 16,
        persistent: bool = False,
    ):
        if strength < 16:
            raise ValueError("CSRF strength must be at least 16 bytes")
        self.prefix = prefix.rstrip("_")
        self.storage = storage if storage is not None else {}
        self.storage_limit = storage_limit
        self.strength = strength
        self.persistent = persistent

    @property
    def name_key(self) -> str:
        return f"{self.prefix}_name"

    @property
    def value_key(self) -> str:
        return f"{self.prefix}_value"

    def generate_token(self) -> CsrfToken:
        name = f"{self.prefix}{secrets.token_hex(8)}"
        value = secrets.token_hex(self.strength)
        self.storage[name] = value
        self._enforce_storage_limit()
        return CsrfToken(
            name_key=self.name_key, name=name, value_key=self.value_key, value=value
        )

    def validate_token(self, name: str, value: str) -> bool:
        stored = self.storage.get(name)
        if stored is None:
            logger.warning(f"Unknown CSRF token name: {name}")
            return False
        valid = secrets.compare_digest(stored, value)
        if not self.persistent:
            del self.storage[name]
        return valid

    def _enforce_storage_limit(self) -> None:
        # dicts keep insertion order, so the first keys are the oldest
        while self.storage_limit > 0 and len(self.storage) > self.storage_limit:
            oldest = next(iter(self.storage))
            del self.storage[oldest]
