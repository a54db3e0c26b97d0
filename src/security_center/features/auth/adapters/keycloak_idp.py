"""Keycloak identity provider adapter."""

import logging
from typing import Any, Dict, Optional

from keycloak import KeycloakAdmin, KeycloakOpenID, KeycloakOpenIDConnection
from keycloak.exceptions import KeycloakAuthenticationError, KeycloakError

from ....core.exceptions.auth import (
    IdpConnectionError,
    IdpOperationError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
)
from ..entities.idp import IdpTokens, IdpUserInfo, NewIdpUser

logger = logging.getLogger(__name__)


def normalize_server_url(server_url: str) -> str:
    """Strip the legacy ``/auth`` suffix (Keycloak v18+ has no context path)."""
    server_url = server_url.rstrip("/")
    if server_url.endswith("/auth"):
        server_url = server_url[:-5]
    return server_url


class KeycloakIdpAdapter:
    """Identity provider backed by Keycloak through python-keycloak.

    Token operations use the OpenID client; password reset and user creation
    use the admin client, authenticated with client credentials when a client
    secret is configured and with an admin user otherwise.
    """

    def __init__(
        self,
        server_url: str,
        realm_name: str,
        client_id: str,
        client_secret: Optional[str] = None,
        verify: bool = True,
        admin_username: Optional[str] = None,
        admin_password: Optional[str] = None,
        openid_client: Optional[KeycloakOpenID] = None,
        admin_client: Optional[KeycloakAdmin] = None,
    ):
        self.server_url = normalize_server_url(server_url)
        self.realm_name = realm_name
        self.client_id = client_id
        self.client_secret = client_secret
        self.verify = verify
        self.admin_username = admin_username
        self.admin_password = admin_password
        self._openid_client = openid_client
        self._admin_client = admin_client

    def _openid(self) -> KeycloakOpenID:
        if self._openid_client is None:
            try:
                self._openid_client = KeycloakOpenID(
                    server_url=self.server_url,
                    client_id=self.client_id,
                    realm_name=self.realm_name,
                    client_secret_key=self.client_secret,
                    verify=self.verify,
                )
                logger.info(f"Initialized OpenID client for realm: {self.realm_name}")
            except KeycloakError as e:
                raise IdpConnectionError(f"Cannot initialize OpenID client: {e}") from e
        return self._openid_client

    def _admin(self) -> KeycloakAdmin:
        if self._admin_client is None:
            try:
                if self.client_secret:
                    connection = KeycloakOpenIDConnection(
                        server_url=self.server_url,
                        realm_name=self.realm_name,
                        client_id=self.client_id,
                        client_secret_key=self.client_secret,
                        verify=self.verify,
                    )
                else:
                    # Admin users authenticate in master and operate on the target realm
                    connection = KeycloakOpenIDConnection(
                        server_url=self.server_url,
                        username=self.admin_username,
                        password=self.admin_password,
                        realm_name=self.realm_name,
                        user_realm_name="master",
                        client_id="admin-cli",
                        verify=self.verify,
                    )
                self._admin_client = KeycloakAdmin(connection=connection)
                logger.info(f"Initialized Keycloak admin client for realm: {self.realm_name}")
            except KeycloakError as e:
                raise IdpConnectionError(f"Cannot connect to Keycloak admin API: {e}") from e
        return self._admin_client

    async def login(self, username: str, password: str) -> IdpTokens:
        try:
            response = await self._openid().a_token(username=username, password=password)
        except KeycloakAuthenticationError as e:
            logger.warning(f"Authentication failed for user {username}")
            raise InvalidCredentialsError("Invalid username or password") from e
        except KeycloakError as e:
            logger.error(f"Keycloak error during authentication: {e.response_code}")
            raise IdpConnectionError("Authentication service error") from e

        logger.info(f"Successfully authenticated user: {username}")
        return IdpTokens.from_token_response(response)

    async def refresh(self, refresh_token: str) -> IdpTokens:
        try:
            response = await self._openid().a_refresh_token(refresh_token)
        except KeycloakAuthenticationError as e:
            logger.warning("Token refresh rejected by Keycloak")
            raise TokenExpiredError("Refresh token expired or invalid") from e
        except KeycloakError as e:
            if e.response_code == 400:
                # invalid_grant is reported as a 400 on the token endpoint
                raise TokenExpiredError("Refresh token expired or invalid") from e
            logger.error(f"Keycloak error during token refresh: {e.response_code}")
            raise IdpConnectionError("Token refresh service error") from e

        return IdpTokens.from_token_response(response)

    async def logout(self, refresh_token: str) -> None:
        try:
            await self._openid().a_logout(refresh_token)
            logger.info("Successfully logged out user")
        except KeycloakError as e:
            # A refresh token that is already invalid means the user is logged out
            logger.warning(f"Logout completed with warning: {e.response_code}")

    async def get_user_info(self, access_token: str) -> IdpUserInfo:
        try:
            claims = await self._openid().a_userinfo(access_token)
        except KeycloakAuthenticationError as e:
            raise InvalidTokenError("Access token is invalid") from e
        except KeycloakError as e:
            logger.error(f"Keycloak error getting user info: {e.response_code}")
            raise IdpConnectionError("User info service error") from e

        return IdpUserInfo.from_claims(claims or {})

    async def introspect(self, token: str) -> Dict[str, Any]:
        try:
            return await self._openid().a_introspect(token)
        except KeycloakError as e:
            logger.error(f"Token introspection failed: {e.response_code}")
            raise IdpConnectionError("Token introspection service error") from e

    async def reset_password(self, username: str) -> None:
        admin = self._admin()
        try:
            users = await admin.a_get_users({"username": username, "exact": True})
        except KeycloakError as e:
            raise IdpConnectionError("User lookup failed") from e

        if not users:
            # Unknown usernames are not reported to the caller
            logger.info(f"Password reset requested for unknown user {username}")
            return

        try:
            await admin.a_send_update_account(user_id=users[0]["id"], payload=["UPDATE_PASSWORD"])
            logger.info(f"Password reset email sent to user {username}")
        except KeycloakError as e:
            raise IdpOperationError("Cannot send password reset email") from e

    async def create_user(self, user: NewIdpUser) -> str:
        payload: Dict[str, Any] = {
            "username": user.username,
            "email": user.email,
            "firstName": user.first_name,
            "lastName": user.last_name,
            "enabled": user.enabled,
            "emailVerified": user.email_verified,
            "requiredActions": list(user.required_actions),
            "attributes": dict(user.attributes),
        }
        if user.password:
            payload["credentials"] = [{"type": "password", "value": user.password, "temporary": False}]

        try:
            user_id = await self._admin().a_create_user(payload, exist_ok=False)
        except KeycloakError as e:
            logger.error(f"Failed to create user {user.username}: {e.response_code}")
            raise IdpOperationError(
                "Cannot create user",
                details={"username": user.username, "status": e.response_code},
            ) from e

        logger.info(f"Created user {user.username} in realm {self.realm_name}")
        return user_id

    async def close(self) -> None:
        """python-keycloak clients hold no resources that need closing."""
        return None
