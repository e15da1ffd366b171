# authcore/infra/memory/in_memory_refresh_token_store.py
from __future__ import annotations

import threading
from datetime import datetime

from authcore.services._shared.ports import RefreshTokenRecord, RefreshTokenStore


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    Process-local refresh token registry.

    .. note::
       Every read and write goes through one lock so a concurrent logout and
       refresh on the same token never observe a half-updated index. Records
       do not survive a restart and are not shared between processes.
    """

    def __init__(self) -> None:
        self._by_token: dict[str, RefreshTokenRecord] = {}
        self._by_user: dict[str, set[str]] = {}
        self._lock = threading.Lock()

    def add(
        self,
        token: str,
        user_id: str,
        created_at: datetime,
        expires_at: datetime,
    ) -> None:
        record = RefreshTokenRecord(
            token=token,
            user_id=str(user_id),
            created_at=created_at,
            expires_at=expires_at,
        )
        with self._lock:
            self._by_token[token] = record
            self._by_user.setdefault(record.user_id, set()).add(token)

    def remove(self, token: str) -> bool:
        with self._lock:
            return self._pop(token) is not None

    def remove_all_for_user(self, user_id: str) -> int:
        with self._lock:
            tokens = self._by_user.pop(str(user_id), set())
            for token in tokens:
                self._by_token.pop(token, None)
            return len(tokens)

    def find_by_token(self, token: str) -> RefreshTokenRecord | None:
        with self._lock:
            return self._by_token.get(token)

    def find_by_user(self, user_id: str) -> list[RefreshTokenRecord]:
        with self._lock:
            records = [self._by_token[t] for t in self._by_user.get(str(user_id), ())]
        return sorted(records, key=lambda r: r.created_at)

    def clear(self) -> None:
        with self._lock:
            self._by_token.clear()
            self._by_user.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_token)

    # caller holds the lock
    def _pop(self, token: str) -> RefreshTokenRecord | None:
        record = self._by_token.pop(token, None)
        if record is None:
            return None
        owned = self._by_user.get(record.user_id)
        if owned is not None:
            owned.discard(token)
            if not owned:
                del self._by_user[record.user_id]
        return record
