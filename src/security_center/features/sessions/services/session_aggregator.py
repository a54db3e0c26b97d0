"""Builds the session shell from customer and contract resolution."""

import asyncio
import logging

from ..entities.session_context import SessionContext
from .contract_resolver import ContractResolver
from .customer_resolver import CustomerResolver

logger = logging.getLogger(__name__)


class SessionAggregator:
    """Runs customer and contract resolution concurrently and merges them.

    Either failure fails the aggregation. Identifiers, timestamps and status
    are left for the session manager to stamp.
    """

    def __init__(self, customer_resolver: CustomerResolver, contract_resolver: ContractResolver):
        self.customer_resolver = customer_resolver
        self.contract_resolver = contract_resolver

    async def aggregate(self, party_id: str) -> SessionContext:
        logger.debug(f"Aggregating session data for party {party_id}")

        customer_info, contracts = await asyncio.gather(
            self.customer_resolver.resolve(party_id),
            self.contract_resolver.resolve(party_id),
        )

        return SessionContext(
            party_id=party_id,
            customer_info=customer_info,
            active_contracts=contracts,
        )
