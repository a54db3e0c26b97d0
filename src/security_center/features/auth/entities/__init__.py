"""Auth entities."""

from .idp import IdpAdapterProtocol, IdpTokens, IdpUserInfo, NewIdpUser

__all__ = ["IdpAdapterProtocol", "IdpTokens", "IdpUserInfo", "NewIdpUser"]
