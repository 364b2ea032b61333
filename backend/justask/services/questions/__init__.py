from justask.services.questions.dto import AnswerOut, Author, QuestionIn, QuestionOut
from justask.services.questions.service import QuestionService

__all__ = ["AnswerOut", "Author", "QuestionIn", "QuestionOut", "QuestionService"]
