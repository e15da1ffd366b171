"""Unit tests for SQLAlchemyReadOnlyUnitOfWork (guards work on SQLite too)."""

import pytest
from authcore.models.user import User
from authcore.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from authcore.uow import SQLAlchemyUnitOfWork as RWuow
from tests.factories.user import UserFactory


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, db):
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(UserFactory.build())
            uow.session.flush()
        db.session.rollback()

    def test_allows_reads(self, db):
        with RWuow() as uow:
            uow.users.add(UserFactory.build(email="reader@example.com"))

        with ROuow() as uow:
            assert uow.users.get_by_email("reader@example.com") is not None

    def test_disallows_commit(self, db):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_changes_do_not_persist(self, db):
        with RWuow() as uow:
            user = uow.users.add(UserFactory.build(email="keep@example.com"))
            user_id = user.id

        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            u = uow.session.get(User, user_id)
            u.email = "mutated-in-ro@example.com"
            uow.session.flush()

        with RWuow() as uow:
            assert uow.session.get(User, user_id).email == "keep@example.com"
