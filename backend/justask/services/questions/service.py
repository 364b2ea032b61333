"""Question and answer use cases."""

from __future__ import annotations

import logging

from justask.models.question import Answer, Question
from justask.services._shared.base import BaseService
from justask.services._shared.errors import NotFoundError, ServiceError
from justask.services.questions.dto import AnswerOut, Author, QuestionIn, QuestionOut

log = logging.getLogger(__name__)


class QuestionService(BaseService):
    """Create, list and read questions; append answers."""

    def list_questions(self) -> list[QuestionOut]:
        """Return all questions, newest first."""
        with self.ro_uow() as uow:
            return [QuestionOut.from_model(q) for q in uow.questions.list_newest()]

    def create_question(self, author: Author, dto: QuestionIn) -> QuestionOut:
        """
        Store a new question.

        :raises ServiceError: If the title or content is blank.
        """
        title = (dto.title or "").strip()
        content = (dto.content or "").strip()
        if not title or not content:
            raise ServiceError("Title and content are required")

        with self.rw_uow() as uow:
            question = uow.questions.add(
                Question(
                    title=title,
                    content=content,
                    author_id=author.id,
                    author_username=author.username,
                    views=0,
                )
            )
            out = QuestionOut.from_model(question)
        log.info("Question created", extra={"user_id": author.id})
        return out

    def get_question(self, question_id: int) -> QuestionOut:
        """
        Read one question, counting the read.

        :raises NotFoundError: If the question does not exist.
        """
        with self.rw_uow() as uow:
            if not uow.questions.increment_views(question_id):
                raise NotFoundError("Question", question_id)
            question = uow.questions.get(question_id)
            if question is None:  # pragma: no cover - deleted mid-transaction
                raise NotFoundError("Question", question_id)
            return QuestionOut.from_model(question)

    def add_answer(self, question_id: int, author: Author, content: str) -> AnswerOut:
        """
        Append an answer to a question.

        :raises ServiceError: If the content is blank.
        :raises NotFoundError: If the question does not exist.
        """
        content = (content or "").strip()
        if not content:
            raise ServiceError("Answer content is required")

        with self.rw_uow() as uow:
            if not uow.questions.exists(question_id):
                raise NotFoundError("Question", question_id)
            answer = uow.answers.add(
                Answer(
                    question_id=question_id,
                    content=content,
                    author_id=author.id,
                    author_username=author.username,
                    thanks=0,
                )
            )
            out = AnswerOut.from_model(answer)
        return out
