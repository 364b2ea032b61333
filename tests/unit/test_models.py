"""Unit tests for model validators and constraints."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from justask.core.extensions import db
from justask.models import AnswerThank, User

from tests.factories.question import AnswerFactory
from tests.factories.user import UserFactory


def test_username_is_trimmed(app) -> None:
    user = User(username="  dora  ", phone="12345678", password_hash="x")

    assert user.username == "dora"


@pytest.mark.parametrize("username", ["", "   ", "x" * 51])
def test_username_rejected(app, username: str) -> None:
    with pytest.raises(ValueError):
        User(username=username, phone="12345678", password_hash="x")


@pytest.mark.parametrize("phone", ["1234567", "123456789", "1234567a", ""])
def test_phone_must_be_eight_digits(app, phone: str) -> None:
    with pytest.raises(ValueError):
        User(username="dora", phone=phone, password_hash="x")


def test_username_unique(app) -> None:
    UserFactory(username="dora")

    db.session.add(User(username="dora", phone="87654321", password_hash="x"))
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()


def test_thank_pair_unique(app) -> None:
    answer = AnswerFactory()
    fan = UserFactory()
    db.session.add(AnswerThank(answer_id=answer.id, user_id=fan.id))
    db.session.commit()

    db.session.add(AnswerThank(answer_id=answer.id, user_id=fan.id))
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()


def test_thanked_by_is_ordered(app) -> None:
    answer = AnswerFactory()
    fans = UserFactory.create_batch(3)
    for fan in reversed(fans):
        db.session.add(AnswerThank(answer_id=answer.id, user_id=fan.id))
        db.session.commit()

    db.session.expire_all()
    assert answer.thanked_by == [f.id for f in reversed(fans)]


def test_repr(app) -> None:
    user = UserFactory()

    assert repr(user) == f"<User id={user.id}>"
