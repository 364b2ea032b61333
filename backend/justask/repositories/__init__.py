"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from justask.repositories.base import BaseRepository, apply_sorting
from justask.repositories.question import AnswerRepository, QuestionRepository
from justask.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "apply_sorting",
    "AnswerRepository",
    "QuestionRepository",
    "UserRepository",
]
