"""User repository: the user record store used by the auth services."""

from __future__ import annotations

from datetime import datetime
from typing import Any, cast

from sqlalchemy import Select, select

from authcore.models.user import User
from authcore.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Lookups only ever return *active* users; a deactivated account behaves as
    if it did not exist. This repository NEVER hashes passwords or touches
    tokens.
    """

    model = User

    def _base_select(self) -> Select[Any]:
        return select(User).where(User.is_active.is_(True))

    def _updatable_fields(self) -> set[str]:
        """Publicly allowed updatable fields (not including the password hash)."""
        return {"name", "phone"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Fetch an active user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = self._base_select().where(User.email == email.lower().strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when an active user owns the provided email."""
        stmt = select(User.id).where(
            User.email == email.lower().strip(), User.is_active.is_(True)
        )
        return bool(self.session.execute(stmt).first())

    # ---------------------------- Writes ----------------------------

    def create(
        self,
        *,
        email: str,
        password_hash: str,
        name: str,
        phone: str | None = None,
        client_type: str | None = None,
    ) -> User:
        """Insert a new user row and flush to obtain its id.

        :param password_hash: Already-hashed password.
        :returns: The persisted user.
        """
        user = User(
            email=email,
            password_hash=password_hash,
            name=name,
            phone=phone or None,
            client_type=client_type or "unknown",
        )
        return self.add(user)

    def update_last_login(self, user_id: int, when: datetime) -> bool:
        """Stamp ``last_login``. :returns: ``False`` when the user is gone."""
        user = self.get(user_id)
        if user is None:
            return False
        user.last_login = when
        self.flush()
        return True

    def deactivate(self, user_id: int) -> bool:
        """Soft-delete a user. :returns: ``False`` when already inactive or missing."""
        user = self.get(user_id)
        if user is None:
            return False
        user.is_active = False
        self.flush()
        return True
