"""
gradebook/services/identity.py
Learner identity resolution for the HTTP surface.

The resolver is injected when the app is built; there is no process-wide
fallback learner. When nothing resolves, the caller is unauthenticated.
"""
import logging
from typing import Optional, Protocol

from fastapi import Request

from gradebook.exceptions import InvalidIdentifierError
from gradebook.utils.identifiers import validate_identifier

logger = logging.getLogger(__name__)


class IdentityResolver(Protocol):
    async def resolve(self, request: Request) -> Optional[int]:
        """Return the authenticated learner id, or None."""
        ...


class RequestStateIdentityResolver:
    """Reads `request.state.<attribute>` populated by upstream auth middleware."""

    def __init__(self, attribute: str = "learner_id"):
        self.attribute = attribute

    async def resolve(self, request: Request) -> Optional[int]:
        value = getattr(request.state, self.attribute, None)
        if value is None:
            return None
        return validate_identifier(value, "learner_id")


class HeaderIdentityResolver:
    """
    Reads the learner id from a header set by a trusted gateway.

    Only use behind a gateway that strips the header from client requests.
    """

    def __init__(self, header: str = "X-Learner-Id"):
        self.header = header

    async def resolve(self, request: Request) -> Optional[int]:
        value = request.headers.get(self.header)
        if not value:
            return None
        try:
            return validate_identifier(value, "learner_id")
        except InvalidIdentifierError:
            logger.warning(f"Rejected malformed {self.header} header: {value!r}")
            raise
