"""Concurrent thanks against a file-backed SQLite database."""

from __future__ import annotations

from collections import Counter
from concurrent.futures import ThreadPoolExecutor

from justask.core import components
from justask.core.extensions import db
from justask.models import Answer, AnswerThank

from tests.factories.question import AnswerFactory
from tests.factories.user import UserFactory
from tests.helpers.auth import bearer

WORKERS = 8


def _thank_all(app, url, headers_list):
    def _post(headers):
        return app.test_client().post(url, headers=headers).status_code

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        return list(pool.map(_post, headers_list))


def _counts(answer_id):
    db.session.expire_all()
    answer = db.session.get(Answer, answer_id)
    rows = db.session.query(AnswerThank).filter_by(answer_id=answer_id).count()
    return answer.thanks, rows


def test_same_user_racing_thanks_once(file_app) -> None:
    answer = AnswerFactory()
    fan = UserFactory()
    headers = bearer(components.get_tokens().issue_access(fan))
    url = f"/questions/{answer.question_id}/answers/{answer.id}/thank"

    statuses = _thank_all(file_app, url, [headers] * WORKERS)

    assert Counter(statuses) == Counter({200: 1, 400: WORKERS - 1})
    assert _counts(answer.id) == (1, 1)


def test_many_users_racing_all_count(file_app) -> None:
    answer = AnswerFactory()
    fans = UserFactory.create_batch(WORKERS)
    tokens = components.get_tokens()
    url = f"/questions/{answer.question_id}/answers/{answer.id}/thank"

    statuses = _thank_all(file_app, url, [bearer(tokens.issue_access(f)) for f in fans])

    assert statuses == [200] * WORKERS
    assert _counts(answer.id) == (WORKERS, WORKERS)
