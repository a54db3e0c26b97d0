"""Identity provider selection."""

import logging
from typing import Optional

from ....config.settings import SecurityCenterSettings
from ....core.exceptions.infrastructure import ConfigurationError
from ..entities.idp import IdpAdapterProtocol
from .keycloak_idp import KeycloakIdpAdapter

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("keycloak",)


def _secret(value) -> Optional[str]:
    return value.get_secret_value() if value is not None else None


def create_idp_adapter(settings: SecurityCenterSettings) -> IdpAdapterProtocol:
    """Build the identity provider adapter named by ``idp_provider``.

    Called once at startup; an unknown provider fails the startup.
    """
    provider = settings.idp_provider

    if provider == "keycloak":
        logger.info(f"Using Keycloak identity provider (realm={settings.keycloak_realm})")
        return KeycloakIdpAdapter(
            server_url=settings.keycloak_server_url,
            realm_name=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=_secret(settings.keycloak_client_secret),
            verify=settings.keycloak_verify_ssl,
            admin_username=settings.keycloak_admin_username,
            admin_password=_secret(settings.keycloak_admin_password),
        )

    raise ConfigurationError(
        f"No identity provider adapter available for '{provider}'",
        details={"supported": list(SUPPORTED_PROVIDERS)},
    )
