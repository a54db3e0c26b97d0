"""Identity provider adapters."""

from .factory import create_idp_adapter
from .keycloak_idp import KeycloakIdpAdapter

__all__ = ["KeycloakIdpAdapter", "create_idp_adapter"]
