"""Werkzeug-backed password hashing gateway."""

from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from authcore.services._shared.ports import PasswordHasher


@dataclass(slots=True, frozen=True)
class WerkzeugPasswordHasher(PasswordHasher):
    """
    Hash and verify passwords with :mod:`werkzeug.security`.

    :param method: Werkzeug method string (e.g. ``"scrypt"``, ``"pbkdf2:sha256"``).
    :param salt_length: Salt length in characters.
    """

    method: str = "scrypt"
    salt_length: int = 16

    def hash(self, raw: str) -> str:
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        return generate_password_hash(raw, method=self.method, salt_length=self.salt_length)

    def verify(self, raw: str, hashed: str) -> bool:
        if not hashed or not raw:
            return False
        try:
            # ``check_password_hash`` returns ``Any`` for mypy; coerce to bool.
            return bool(check_password_hash(hashed, raw))
        except ValueError:
            # Unknown or corrupted hash format
            return False
