from justask.services.auth.dto import AuthResult
from justask.services.auth.gate import (
    AuthFailure,
    AuthGate,
    BearerIdentity,
    FailureKind,
    Identity,
    SessionIdentity,
    SessionUser,
)
from justask.services.auth.service import AuthService

__all__ = [
    "AuthFailure",
    "AuthGate",
    "AuthResult",
    "AuthService",
    "BearerIdentity",
    "FailureKind",
    "Identity",
    "SessionIdentity",
    "SessionUser",
]
