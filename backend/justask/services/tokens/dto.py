# justask/services/tokens/dto.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class TokenSubject(Protocol):
    """Anything a token can be issued for (ORM user, DTO, session dict wrapper)."""

    id: int
    username: str
    phone: str


@dataclass(frozen=True, slots=True)
class AccessClaims:
    """
    Decoded access-token payload.

    :param id: User id.
    :param username: Username at issuance time.
    :param phone: Phone at issuance time.
    :param iat: Issued-at, seconds since epoch.
    :param exp: Expiry, seconds since epoch.
    """

    id: int
    username: str
    phone: str
    iat: int
    exp: int


@dataclass(frozen=True, slots=True)
class RefreshClaims:
    """Decoded refresh-token payload; carries no profile data."""

    id: int
    iat: int
    exp: int


class InvalidReason(str, Enum):
    EXPIRED = "expired"
    BAD_SIGNATURE = "bad_signature"
    MALFORMED = "malformed"


@dataclass(frozen=True, slots=True)
class InvalidToken:
    """Verification outcome for any token that must not be trusted."""

    reason: InvalidReason
