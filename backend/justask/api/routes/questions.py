"""Question, answer and thank endpoints."""

from __future__ import annotations

from flask import Blueprint

from justask.api.deps import (
    json_body,
    json_response,
    question_service,
    require_identity,
    thanks_ledger,
    timing,
)
from justask.schemas import AnswerCreateSchema, AnswerSchema, QuestionCreateSchema, QuestionSchema
from justask.services.auth import Identity
from justask.services.questions import Author, QuestionIn

bp = Blueprint("questions", __name__)

question_create_schema = QuestionCreateSchema()
answer_create_schema = AnswerCreateSchema()
question_schema = QuestionSchema()
question_list_schema = QuestionSchema(many=True)
answer_schema = AnswerSchema()


@bp.get("")
@timing
def list_questions():
    """Return all questions, newest first."""

    questions = question_service().list_questions()
    return json_response({"success": True, "questions": question_list_schema.dump(questions)})


@bp.post("")
@require_identity
@timing
def create_question(identity: Identity):
    data = question_create_schema.load(json_body())
    question = question_service().create_question(
        Author(id=identity.id, username=identity.username),
        QuestionIn(title=data["title"], content=data["content"]),
    )
    return json_response(
        {"success": True, "message": "Question posted", "questionId": question.id}
    )


@bp.get("/<int:question_id>")
@timing
def get_question(question_id: int):
    """Return one question and count the view."""

    question = question_service().get_question(question_id)
    return json_response({"success": True, "question": question_schema.dump(question)})


@bp.post("/<int:question_id>/answers")
@require_identity
@timing
def add_answer(question_id: int, identity: Identity):
    data = answer_create_schema.load(json_body())
    answer = question_service().add_answer(
        question_id, Author(id=identity.id, username=identity.username), data["content"]
    )
    return json_response(
        {"success": True, "message": "Answer submitted", "answer": answer_schema.dump(answer)}
    )


@bp.post("/<int:question_id>/answers/<int:answer_id>/thank")
@require_identity
@timing
def thank_answer(question_id: int, answer_id: int, identity: Identity):
    """Thank an answer; each user may thank a given answer once."""

    thanks_ledger().thank(question_id, answer_id, identity.id)
    return json_response({"success": True, "message": "Thanks recorded"})
