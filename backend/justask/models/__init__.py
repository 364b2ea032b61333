from justask.models.question import Answer, AnswerThank, Question
from justask.models.user import User

__all__ = [
    "Answer",
    "AnswerThank",
    "Question",
    "User",
]
