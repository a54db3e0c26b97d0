"""Request context consumed by session creation."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

PARTY_ID_HEADER = "X-Party-Id"
SESSION_ID_HEADER = "X-Session-Id"
FORWARDED_FOR_HEADER = "X-Forwarded-For"
REAL_IP_HEADER = "X-Real-IP"
USER_AGENT_HEADER = "User-Agent"
SOURCE_APPLICATION_HEADER = "X-Source-Application"


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is None:
        value = headers.get(name.lower())
    if value is None:
        return None
    value = value.strip()
    return value or None


def detect_channel(user_agent: Optional[str]) -> str:
    """Classify the calling channel from the User-Agent."""
    if not user_agent:
        return "api"
    if "Mobile" in user_agent:
        return "mobile"
    if "Mozilla" in user_agent:
        return "web"
    return "api"


@dataclass(frozen=True)
class RequestContext:
    """Identity and provenance of an inbound session request."""

    party_id: Optional[str] = None
    session_id: Optional[str] = None
    ip_address: str = "unknown"
    user_agent: Optional[str] = None
    source_application: Optional[str] = None

    @classmethod
    def from_headers(
        cls,
        headers: Mapping[str, str],
        client_host: Optional[str] = None,
    ) -> "RequestContext":
        """Build a context from HTTP headers and the peer address."""
        forwarded_for = _header(headers, FORWARDED_FOR_HEADER)
        if forwarded_for:
            ip_address = forwarded_for.split(",")[0].strip()
        else:
            ip_address = _header(headers, REAL_IP_HEADER) or client_host or "unknown"

        return cls(
            party_id=_header(headers, PARTY_ID_HEADER),
            session_id=_header(headers, SESSION_ID_HEADER),
            ip_address=ip_address,
            user_agent=_header(headers, USER_AGENT_HEADER),
            source_application=_header(headers, SOURCE_APPLICATION_HEADER),
        )

    @property
    def channel(self) -> str:
        return detect_channel(self.user_agent)

    def session_metadata(self) -> Dict[str, Any]:
        """Metadata recorded once on a new session."""
        return {
            "channel": self.channel,
            "sourceApplication": self.source_application,
            "deviceInfo": self.user_agent,
        }
