"""
Local persistence for client-side auth state.

``AuthStore`` plays the role browser localStorage plays for a web frontend:
it keeps the session token, the cached user and the cached role between runs.
"""
from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging
import time

from jose import JWTError, jwt

from .constants import ROLE_KEY, TOKEN_KEY, USER_KEY

logger = logging.getLogger(__name__)


class MemoryStorage:
    """Process-local key/value storage."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage(MemoryStorage):
    """Key/value storage persisted as a JSON object in a single file."""

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self.path = Path(path)
        if self.path.exists():
            try:
                loaded = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                logger.warning(f"Ignoring unreadable auth storage {self.path}: {e}")
            else:
                if isinstance(loaded, dict):
                    self._data = loaded
                else:
                    logger.warning(f"Ignoring auth storage {self.path}: expected a JSON object")

    def set(self, key: str, value: str) -> None:
        super().set(key, value)
        self._flush()

    def remove(self, key: str) -> None:
        super().remove(key)
        self._flush()

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._data), encoding="utf-8")


class AuthStore:
    def __init__(self, backend: Optional[MemoryStorage] = None):
        self.backend = backend if backend is not None else MemoryStorage()

    # Token management
    def get_token(self) -> Optional[str]:
        return self.backend.get(TOKEN_KEY)

    def set_token(self, token: Optional[str]) -> None:
        if token:
            self.backend.set(TOKEN_KEY, token)

    def remove_token(self) -> None:
        self.backend.remove(TOKEN_KEY)

    # User data management
    def get_user(self) -> Optional[Dict[str, Any]]:
        raw = self.backend.get(USER_KEY)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Discarding malformed cached user")
            return None

    def set_user(self, user: Optional[Dict[str, Any]]) -> None:
        if user:
            self.backend.set(USER_KEY, json.dumps(user))

    # Role management
    def get_role(self) -> Optional[str]:
        return self.backend.get(ROLE_KEY)

    def set_role(self, role: Optional[str]) -> None:
        if role:
            self.backend.set(ROLE_KEY, role)

    def clear(self) -> None:
        """Drop every piece of cached auth state."""
        for key in (TOKEN_KEY, USER_KEY, ROLE_KEY):
            self.backend.remove(key)

    def is_authenticated(self) -> bool:
        return bool(self.get_token() and self.get_user())

    def is_token_expired(self, now: Optional[float] = None) -> bool:
        """True when there is no token, it cannot be parsed, or its ``exp`` has passed.

        The signature is not checked here; the server does that.
        """
        token = self.get_token()
        if not token:
            return True

        try:
            claims = jwt.get_unverified_claims(token)
        except JWTError:
            logger.warning("Cached token could not be parsed")
            return True

        exp = claims.get("exp")
        if exp is None:
            return False
        return exp < (time.time() if now is None else now)
