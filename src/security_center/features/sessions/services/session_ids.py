"""Session identifier issuing and verification.

Identifiers keep the ``session_<partyId>_...`` shape so the party can be read
back from them, and end in an HMAC-SHA256 tag over the part between the
prefix and the tag:

    session_<partyId>_<epochMillis>_<sig>   time-based, one per login
    session_<partyId>_<sig>                 deterministic, one per party
"""

import hashlib
import hmac
from dataclasses import dataclass
from datetime import datetime

from ....core.exceptions.session import InvalidSessionIdError, SessionNotFoundError

SESSION_PREFIX = "session"
SIGNATURE_LENGTH = 32


@dataclass(frozen=True)
class ParsedSessionId:
    """Result of parsing a session identifier."""
    party_id: str
    signed: bool


class SessionIdCodec:
    """Issues signed session ids and recovers the party id from them."""

    def __init__(self, signing_key: str, require_signed: bool = True):
        if not signing_key:
            raise ValueError("Session signing key must not be empty")
        self._key = signing_key.encode("utf-8")
        self.require_signed = require_signed

    def _sign(self, payload: str) -> str:
        digest = hmac.new(self._key, payload.encode("utf-8"), hashlib.sha256).hexdigest()
        return digest[:SIGNATURE_LENGTH]

    def new_session_id(self, party_id: str, now: datetime) -> str:
        """Time-based id for a new login session."""
        payload = f"{party_id}_{int(now.timestamp() * 1000)}"
        return f"{SESSION_PREFIX}_{payload}_{self._sign(payload)}"

    def party_session_id(self, party_id: str) -> str:
        """Deterministic id addressing the same cache slot for a party."""
        return f"{SESSION_PREFIX}_{party_id}_{self._sign(party_id)}"

    def parse(self, session_id: str) -> ParsedSessionId:
        """Split an id into its party id and whether its tag verifies.

        Raises:
            InvalidSessionIdError: if the id does not carry a party id
        """
        parts = session_id.split("_") if session_id else []
        if len(parts) < 2 or parts[0] != SESSION_PREFIX or not parts[1]:
            raise InvalidSessionIdError(
                "Malformed session id",
                details={"reason": "expected session_<partyId>_..."},
            )

        signed = False
        if len(parts) >= 3:
            payload = "_".join(parts[1:-1])
            signed = hmac.compare_digest(self._sign(payload).encode(), parts[-1].encode("utf-8"))

        return ParsedSessionId(party_id=parts[1], signed=signed)

    def verify(self, session_id: str) -> bool:
        try:
            return self.parse(session_id).signed
        except InvalidSessionIdError:
            return False

    def resolve_party_id(self, session_id: str) -> str:
        """Party id a cache miss may be rebuilt for.

        Raises:
            InvalidSessionIdError: if the id is malformed
            SessionNotFoundError: if signatures are required and the tag is wrong
        """
        parsed = self.parse(session_id)
        if self.require_signed and not parsed.signed:
            raise SessionNotFoundError("Session not found")
        return parsed.party_id
