from justask.services.revocation.registry import RevocationRegistry

__all__ = ["RevocationRegistry"]
