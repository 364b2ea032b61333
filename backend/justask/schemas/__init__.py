"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    AuthPayloadSchema,
    CredentialsSchema,
    IdentitySchema,
    LogoutSchema,
    RefreshSchema,
    RegisterSchema,
    SessionUserSchema,
    UserSchema,
    WebRegisterSchema,
)
from .question import AnswerCreateSchema, AnswerSchema, QuestionCreateSchema, QuestionSchema

__all__ = [
    "AnswerCreateSchema",
    "AnswerSchema",
    "AuthPayloadSchema",
    "CredentialsSchema",
    "IdentitySchema",
    "LogoutSchema",
    "QuestionCreateSchema",
    "QuestionSchema",
    "RefreshSchema",
    "RegisterSchema",
    "SessionUserSchema",
    "UserSchema",
    "WebRegisterSchema",
]
