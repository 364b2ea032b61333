"""Question and answer Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from .common import StrippedSchema


class QuestionCreateSchema(StrippedSchema):
    title = fields.String(
        required=True,
        validate=validate.Length(min=1, max=200, error="Title must be 1-200 characters"),
        error_messages={"required": "Title and content are required"},
    )
    content = fields.String(
        required=True,
        validate=validate.Length(min=1, error="Title and content are required"),
        error_messages={"required": "Title and content are required"},
    )


class AnswerCreateSchema(StrippedSchema):
    content = fields.String(
        required=True,
        validate=validate.Length(min=1, error="Answer content is required"),
        error_messages={"required": "Answer content is required"},
    )


class AnswerSchema(Schema):
    id = fields.Integer(required=True)
    question_id = fields.Integer(data_key="questionId")
    content = fields.String()
    author_id = fields.Integer(data_key="authorId")
    author_username = fields.String(data_key="authorUsername")
    thanks = fields.Integer()
    thanked_by = fields.List(fields.Integer(), data_key="thankedBy")
    created_at = fields.DateTime(data_key="createdAt")


class QuestionSchema(Schema):
    """Full question with its answers, oldest answer first."""

    id = fields.Integer(required=True)
    title = fields.String()
    content = fields.String()
    author_id = fields.Integer(data_key="authorId")
    author_username = fields.String(data_key="authorUsername")
    views = fields.Integer()
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")
    answers = fields.List(fields.Nested(AnswerSchema))
