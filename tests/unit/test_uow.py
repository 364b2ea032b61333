"""Unit tests for the SQLAlchemy units of work."""

from __future__ import annotations

import threading

import pytest
from sqlalchemy import text

from justask.core.extensions import db
from justask.models import User
from justask.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

from tests.factories.user import UserFactory


def test_rw_commits_on_success(app) -> None:
    with SQLAlchemyUnitOfWork() as uow:
        uow.users.add(User(username="gina", phone="12121212", password_hash="x"))

    db.session.expire_all()
    assert SQLAlchemyUnitOfWork().users.exists_by_username("gina")


def test_rw_rolls_back_on_error(app) -> None:
    with pytest.raises(RuntimeError):
        with SQLAlchemyUnitOfWork() as uow:
            uow.users.add(User(username="hank", phone="13131313", password_hash="x"))
            raise RuntimeError("boom")

    assert not SQLAlchemyUnitOfWork().users.exists_by_username("hank")


def test_ro_blocks_writes(app) -> None:
    with pytest.raises(RuntimeError, match="flush blocked"):
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            uow.users.add(User(username="ivy", phone="14141414", password_hash="x"))

    with pytest.raises(RuntimeError, match="does not allow commit"):
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            uow.commit()


def test_ro_reads(app) -> None:
    user = UserFactory()

    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        assert uow.users.get(user.id).username == user.username


def test_ro_blocks_raw_dml(app) -> None:
    with pytest.raises(RuntimeError, match="SQL statement blocked"):
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            uow.session.execute(text("DELETE FROM users"))


def test_ro_guards_are_removed_on_exit(app) -> None:
    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        uow.users.exists_by_username("nobody")

    with SQLAlchemyUnitOfWork() as uow:
        uow.users.add(User(username="jack", phone="15151515", password_hash="x"))

    assert SQLAlchemyUnitOfWork().users.exists_by_username("jack")


def test_ro_attaches_to_open_transaction(app) -> None:
    user = UserFactory()
    db.session.get(User, user.id)
    assert db.session().in_transaction()

    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        assert uow.users.get(user.id) is not None

    assert db.session().in_transaction()
    db.session.rollback()


def test_ro_in_one_thread_does_not_block_writers_in_another(file_app) -> None:
    reading = threading.Event()
    written = threading.Event()
    errors: list[Exception] = []

    def reader() -> None:
        with file_app.app_context():
            try:
                with SQLAlchemyReadOnlyUnitOfWork() as uow:
                    uow.users.exists_by_username("nobody")
                    reading.set()
                    written.wait(timeout=5)
            except Exception as exc:  # surfaced through ``errors``
                errors.append(exc)
            finally:
                reading.set()
                db.session.remove()

    thread = threading.Thread(target=reader)
    thread.start()
    try:
        assert reading.wait(timeout=5)
        with SQLAlchemyUnitOfWork() as uow:
            uow.users.add(User(username="kate", phone="16161616", password_hash="x"))
    finally:
        written.set()
        thread.join(timeout=5)

    assert errors == []
    assert SQLAlchemyUnitOfWork().users.exists_by_username("kate")
