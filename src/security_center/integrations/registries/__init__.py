"""Downstream registry clients and their capability protocols."""

from .base_client import BaseServiceClient
from .contract_client import ContractRegistryClient
from .customer_client import CustomerRegistryClient
from .product_client import ProductCatalogClient
from .protocols import (
    ContractRegistryProtocol,
    CustomerRegistryProtocol,
    ProductCatalogProtocol,
    RoleRegistryProtocol,
)
from .role_client import RoleRegistryClient

__all__ = [
    "BaseServiceClient",
    "ContractRegistryClient",
    "ContractRegistryProtocol",
    "CustomerRegistryClient",
    "CustomerRegistryProtocol",
    "ProductCatalogClient",
    "ProductCatalogProtocol",
    "RoleRegistryClient",
    "RoleRegistryProtocol",
]
