from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """One-way password hash/verify capability."""

    def hash(self, raw: str) -> str: ...

    def verify(self, raw: str, hashed: str) -> bool: ...
