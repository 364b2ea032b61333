from justask.services.identity.dto import CredentialsIn, RegisterIn, UserOut
from justask.services.identity.service import IdentityService

__all__ = ["CredentialsIn", "IdentityService", "RegisterIn", "UserOut"]
