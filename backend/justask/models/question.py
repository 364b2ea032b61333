"""Question, answer and thank models."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from justask.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin, TimestampMixin


class Question(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    A question and its ordered answers.

    ``author_username`` is a snapshot taken at creation; later renames do not
    rewrite history. ``views`` only grows, through
    :meth:`QuestionRepository.increment_views`.
    """

    __tablename__ = "questions"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    author_username: Mapped[str] = mapped_column(String(50), nullable=False)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    answers: Mapped[list[Answer]] = relationship(
        back_populates="question",
        order_by="Answer.id",
        lazy="selectin",
    )

    __table_args__ = (Index("ix_questions_created_at", "created_at"),)


class Answer(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """
    An answer under a question.

    Answers are append-only. ``thanks`` always equals the number of
    :class:`AnswerThank` rows for the answer; both are written only by the
    thanks ledger, inside one transaction.
    """

    __tablename__ = "answers"

    question_id: Mapped[int] = mapped_column(
        ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    author_username: Mapped[str] = mapped_column(String(50), nullable=False)
    thanks: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    question: Mapped[Question] = relationship(back_populates="answers")
    thanked: Mapped[list[AnswerThank]] = relationship(
        order_by="AnswerThank.id",
        lazy="selectin",
        viewonly=True,
    )

    @property
    def thanked_by(self) -> list[int]:
        """User ids that thanked this answer, in thank order."""
        return [t.user_id for t in self.thanked]


class AnswerThank(PKMixin, CreatedAtMixin, db.Model):
    """One row per (answer, user) thank; the unique key enforces at-most-once."""

    __tablename__ = "answer_thanks"

    answer_id: Mapped[int] = mapped_column(
        ForeignKey("answers.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)

    __table_args__ = (
        UniqueConstraint("answer_id", "user_id", name="uq_answer_thanks_answer_id_user_id"),
    )
