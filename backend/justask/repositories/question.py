"""Question and answer repositories."""

from __future__ import annotations

from sqlalchemy import Integer, insert, literal, select, update

from justask.models.question import Answer, AnswerThank, Question
from justask.repositories.base import BaseRepository


class QuestionRepository(BaseRepository[Question]):
    """Persistence-only repository for :class:`Question`."""

    model = Question

    def _sortable_fields(self):
        return {"created_at": Question.created_at}

    def list_newest(self) -> list[Question]:
        """Return every question, newest first."""
        return self.list(sort=["-created_at"])

    def increment_views(self, question_id: int) -> bool:
        """Bump ``views`` by one in a single ``UPDATE``.

        The increment happens in the database, so concurrent readers never
        lose a count.

        :returns: ``True`` when the question exists.
        :rtype: bool
        """
        stmt = (
            update(Question)
            .where(Question.id == question_id)
            .values(views=Question.views + 1)
        )
        result = self.session.execute(stmt)
        return result.rowcount == 1

    def exists(self, question_id: int) -> bool:
        stmt = select(Question.id).where(Question.id == question_id)
        return self.session.execute(stmt).first() is not None


class AnswerRepository(BaseRepository[Answer]):
    """Persistence-only repository for :class:`Answer` and its thanks."""

    model = Answer

    def exists_under_question(self, question_id: int, answer_id: int) -> bool:
        stmt = select(Answer.id).where(Answer.id == answer_id, Answer.question_id == question_id)
        return self.session.execute(stmt).first() is not None

    def record_thank(self, question_id: int, answer_id: int, user_id: int) -> bool:
        """Insert a thank row and bump the counter, only if allowed.

        The row is written by one ``INSERT ... SELECT`` guarded by the answer
        belonging to the question and no prior thank by ``user_id``. The
        counter update runs in the same transaction and only when a row was
        inserted. A concurrent duplicate that slips past the guard hits
        ``uq_answer_thanks_answer_id_user_id`` and raises ``IntegrityError``.

        :returns: ``True`` when the thank was recorded, ``False`` when zero
            rows matched the guard.
        :rtype: bool
        """
        answers = Answer.__table__
        thanks = AnswerThank.__table__
        already = (
            select(thanks.c.id)
            .where(thanks.c.answer_id == answers.c.id, thanks.c.user_id == user_id)
            .correlate(answers)
            .exists()
        )
        source = select(answers.c.id, literal(user_id, Integer)).where(
            answers.c.id == answer_id,
            answers.c.question_id == question_id,
            ~already,
        )
        inserted = self.session.execute(
            insert(thanks).from_select(["answer_id", "user_id"], source)
        )
        if inserted.rowcount != 1:
            return False

        self.session.execute(
            update(answers).where(answers.c.id == answer_id).values(thanks=answers.c.thanks + 1)
        )
        return True
