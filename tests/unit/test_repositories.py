"""Unit tests for repository queries."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from justask.core.extensions import db
from justask.models import Answer, AnswerThank
from justask.repositories import AnswerRepository, QuestionRepository, UserRepository

from tests.factories.question import AnswerFactory, QuestionFactory
from tests.factories.user import UserFactory


def test_user_lookup_by_username_and_phone(app) -> None:
    user = UserFactory(username="erin", phone="44443333")
    repo = UserRepository()

    assert repo.get_by_username_and_phone(" erin ", "44443333").id == user.id
    assert repo.get_by_username_and_phone("erin", "44443334") is None
    assert repo.exists_by_username("erin")
    assert repo.exists_by_phone("44443333")
    assert not repo.exists_by_phone("00000000")



def test_increment_views(app) -> None:
    question = QuestionFactory()
    repo = QuestionRepository()

    assert repo.increment_views(question.id)
    assert repo.increment_views(question.id)
    db.session.commit()

    db.session.expire_all()
    assert repo.get(question.id).views == 2
    assert not repo.increment_views(99999)


def test_record_thank_guards(app) -> None:
    answer = AnswerFactory()
    fan = UserFactory()
    repo = AnswerRepository()

    assert repo.record_thank(answer.question_id, answer.id, fan.id) is True
    assert repo.record_thank(answer.question_id, answer.id, fan.id) is False
    assert repo.record_thank(answer.question_id + 1000, answer.id, fan.id) is False
    db.session.commit()

    assert db.session.query(AnswerThank).filter_by(answer_id=answer.id, user_id=fan.id).count() == 1
    assert db.session.get(Answer, answer.id).thanks == 1
    assert repo.exists_under_question(answer.question_id, answer.id)
    assert not repo.exists_under_question(answer.question_id + 1000, answer.id)


def test_constraint_backstops_guard(app) -> None:
    """A raw duplicate insert (bypassing the guard) is stopped by the unique key."""

    answer = AnswerFactory()
    fan = UserFactory()
    AnswerRepository().record_thank(answer.question_id, answer.id, fan.id)
    db.session.commit()

    db.session.add(AnswerThank(answer_id=answer.id, user_id=fan.id))
    with pytest.raises(IntegrityError):
        db.session.flush()
    db.session.rollback()


def test_list_newest_breaks_ties_by_id(app) -> None:
    questions = QuestionFactory.create_batch(3)

    listed = QuestionRepository().list_newest()

    assert [q.id for q in listed] == [q.id for q in reversed(questions)]
