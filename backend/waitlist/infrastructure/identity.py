"""Identity Gate — verifies bearer tokens and yields the caller's stable subject id.

Invariants:
    - verify() returns a UserId or raises UnauthorizedError, nothing else
    - Only "access" tokens are accepted; the subject must be a UUID
    - Expiry is checked by python-jose when the token carries an exp claim

Design Decisions:
    - Token issuance lives with the credential service, not here: this adapter
      only decodes
"""

import logging
from uuid import UUID

from jose import JWTError, jwt

from waitlist.core.domain_types import UserId
from waitlist.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"


class JwtIdentityVerifier:
    """IdentityVerifier backed by a shared-secret JWT."""

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        self._secret_key = secret_key
        self._algorithm = algorithm

    def verify(self, credential: str) -> UserId:
        try:
            payload = jwt.decode(
                credential,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except JWTError as e:
            logger.info(f"Rejected bearer token: {e}")
            raise UnauthorizedError() from e

        subject = payload.get("sub")
        if subject is None or payload.get("type") != ACCESS_TOKEN_TYPE:
            raise UnauthorizedError()
        try:
            return UserId(UUID(str(subject)))
        except ValueError as e:
            raise UnauthorizedError() from e
