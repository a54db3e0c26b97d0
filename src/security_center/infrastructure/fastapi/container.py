"""Service container: builds the object graph from settings."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional

from ...config.settings import SecurityCenterSettings
from ...core.exceptions.infrastructure import CacheError
from ...features.auth.adapters.factory import create_idp_adapter
from ...features.auth.entities.idp import IdpAdapterProtocol
from ...features.auth.services.auth_service import AuthService
from ...features.auth.services.user_mapper import UserMapper
from ...features.cache.services.cache_service import CacheService, create_cache_backend
from ...features.sessions.services.contract_resolver import ContractResolver
from ...features.sessions.services.customer_resolver import CustomerResolver
from ...features.sessions.services.session_aggregator import SessionAggregator
from ...features.sessions.services.session_cache import SessionCache
from ...features.sessions.services.session_ids import SessionIdCodec
from ...features.sessions.services.session_manager import SessionManager
from ...integrations.registries.base_client import BaseServiceClient
from ...integrations.registries.contract_client import ContractRegistryClient
from ...integrations.registries.customer_client import CustomerRegistryClient
from ...integrations.registries.product_client import ProductCatalogClient
from ...integrations.registries.role_client import RoleRegistryClient

logger = logging.getLogger(__name__)


def _secret(value) -> Optional[str]:
    return value.get_secret_value() if value is not None else None


@dataclass
class ServiceContainer:
    """Everything the HTTP layer depends on, built once per application."""

    settings: SecurityCenterSettings
    cache_service: CacheService
    session_manager: SessionManager
    auth_service: AuthService
    idp: IdpAdapterProtocol
    clients: List[BaseServiceClient] = field(default_factory=list)

    @classmethod
    def from_settings(cls, settings: SecurityCenterSettings) -> "ServiceContainer":
        timeout = settings.downstream_timeout_seconds
        customer_registry = CustomerRegistryClient(settings.customer_service_url, timeout=timeout)
        contract_registry = ContractRegistryClient(settings.contract_service_url, timeout=timeout)
        role_registry = RoleRegistryClient(settings.reference_data_service_url, timeout=timeout)
        product_catalog = ProductCatalogClient(settings.product_service_url, timeout=timeout)

        backend = create_cache_backend(
            settings.cache_backend,
            redis_url=settings.redis_url,
            redis_password=_secret(settings.redis_password),
            redis_db=settings.redis_db,
            memory_max_size=settings.memory_max_size,
        )
        cache_service = CacheService(backend, namespace=settings.session_cache_prefix)

        aggregator = SessionAggregator(
            CustomerResolver(customer_registry),
            ContractResolver(contract_registry, role_registry, product_catalog),
        )
        session_manager = SessionManager(
            aggregator=aggregator,
            session_cache=SessionCache(cache_service, fail_open=settings.session_cache_fail_open),
            session_ids=SessionIdCodec(
                settings.session_signing_key.get_secret_value(),
                require_signed=settings.session_require_signed_ids,
            ),
            session_ttl=timedelta(minutes=settings.session_timeout_minutes),
        )

        idp = create_idp_adapter(settings)
        user_mapper = UserMapper(
            customer_registry,
            page_size=settings.identity_page_size,
            email_case_sensitive=settings.identity_email_case_sensitive,
        )

        logger.info(
            f"Service container built (cache={settings.cache_backend}, idp={settings.idp_provider}, "
            f"session_ttl={settings.session_timeout_minutes}m)"
        )
        return cls(
            settings=settings,
            cache_service=cache_service,
            session_manager=session_manager,
            auth_service=AuthService(idp, user_mapper, session_manager),
            idp=idp,
            clients=[customer_registry, contract_registry, role_registry, product_catalog],
        )

    async def startup(self) -> None:
        try:
            await self.cache_service.initialize()
        except CacheError as e:
            if not self.settings.session_cache_fail_open:
                raise
            # Left uninitialised; the backend is retried on first use
            logger.warning(f"Session cache unavailable at startup, continuing without it: {e}")

    async def shutdown(self) -> None:
        await asyncio.gather(
            *(client.close() for client in self.clients),
            self.idp.close(),
            return_exceptions=True,
        )
        await self.cache_service.shutdown()
