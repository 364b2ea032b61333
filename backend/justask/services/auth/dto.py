# justask/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

from justask.services.identity.dto import UserOut


@dataclass(frozen=True, slots=True)
class AuthResult:
    """
    Output of a successful mobile register/login.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    :param user: The authenticated user.
    :type user: UserOut
    """

    access_token: str
    refresh_token: str
    user: UserOut
