from justask.services.tokens.dto import AccessClaims, InvalidReason, InvalidToken, RefreshClaims
from justask.services.tokens.service import TokenService

__all__ = ["AccessClaims", "InvalidReason", "InvalidToken", "RefreshClaims", "TokenService"]
