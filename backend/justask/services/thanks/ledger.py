"""At-most-one thank per (user, answer)."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from justask.services._shared.base import BaseService
from justask.services._shared.errors import ConflictError, NotFoundError, violates

log = logging.getLogger(__name__)

THANK_CONSTRAINT = "uq_answer_thanks_answer_id_user_id"
# SQLite names the columns instead of the constraint.
THANK_CONSTRAINT_COLUMNS = "answer_thanks.answer_id, answer_thanks.user_id"

ALREADY_THANKED = "You have already thanked this answer"


class ThanksLedger(BaseService):
    """
    Record thanks so that each user thanks a given answer at most once.

    The whole decision is one conditional write (see
    :meth:`AnswerRepository.record_thank`); there is no read-then-write
    window. Only when nothing was written does a read-only follow-up work out
    why, and that follow-up never mutates.
    """

    def thank(self, question_id: int, answer_id: int, user_id: int) -> None:
        """
        Thank an answer on behalf of ``user_id``.

        :raises NotFoundError: If the answer does not exist under the question.
        :raises ConflictError: If ``user_id`` already thanked this answer.
        """
        try:
            with self.rw_uow() as uow:
                recorded = uow.answers.record_thank(question_id, answer_id, user_id)
        except IntegrityError as exc:
            if not (violates(exc, THANK_CONSTRAINT) or violates(exc, THANK_CONSTRAINT_COLUMNS)):
                raise
            recorded = False

        if recorded:
            log.info("Answer thanked", extra={"user_id": user_id})
            return

        with self.ro_uow() as uow:
            if not uow.answers.exists_under_question(question_id, answer_id):
                raise NotFoundError("Answer", answer_id)
        raise ConflictError(ALREADY_THANKED, entity="Answer")
