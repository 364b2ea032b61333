# justask/services/questions/dto.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from justask.models.question import Answer, Question


@dataclass(frozen=True, slots=True)
class Author:
    """Who is writing; taken from the resolved request identity."""

    id: int
    username: str


@dataclass(frozen=True, slots=True)
class QuestionIn:
    title: str
    content: str


@dataclass(frozen=True, slots=True)
class AnswerOut:
    id: int
    question_id: int
    content: str
    author_id: int
    author_username: str
    thanks: int
    thanked_by: list[int]
    created_at: datetime

    @classmethod
    def from_model(cls, answer: Answer) -> AnswerOut:
        return cls(
            id=answer.id,
            question_id=answer.question_id,
            content=answer.content,
            author_id=answer.author_id,
            author_username=answer.author_username,
            thanks=answer.thanks,
            thanked_by=answer.thanked_by,
            created_at=answer.created_at,
        )


@dataclass(frozen=True, slots=True)
class QuestionOut:
    """
    Question with its answers in creation order.

    :param views: Read count, including the read that produced this DTO.
    :param answers: Answers sorted oldest first.
    """

    id: int
    title: str
    content: str
    author_id: int
    author_username: str
    views: int
    created_at: datetime
    updated_at: datetime
    answers: list[AnswerOut] = field(default_factory=list)

    @classmethod
    def from_model(cls, question: Question) -> QuestionOut:
        return cls(
            id=question.id,
            title=question.title,
            content=question.content,
            author_id=question.author_id,
            author_username=question.author_username,
            views=question.views,
            created_at=question.created_at,
            updated_at=question.updated_at,
            answers=[AnswerOut.from_model(a) for a in question.answers],
        )
