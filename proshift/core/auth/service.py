from typing import Optional
import logging

from jose import jwt, JWTError

from proshift.config.settings import Settings, settings
from .schemas import VerifiedIdentity

logger = logging.getLogger(__name__)

class IdentityVerifier:
    """Verifies ID tokens issued by the external identity provider"""

    def __init__(self, config: Settings = settings):
        self.secret_key = config.identity_secret_key
        self.algorithm = config.identity_algorithm
        self.audience = config.identity_audience
        self.issuer = config.identity_issuer

    def decode_token(self, token: str) -> Optional[dict]:
        """Verify signature and expiry, return the claim set"""
        options = {"verify_aud": self.audience is not None}
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options=options,
            )
        except JWTError as e:
            logger.warning(f"Token rejected: {e}")
            return None

    def verify(self, token: str) -> Optional[VerifiedIdentity]:
        """Decoded identity, or None when the token or its email claim is unusable"""
        claims = self.decode_token(token)
        if not claims:
            return None

        email = claims.get("email")
        if not email:
            logger.warning("Token without email claim")
            return None

        return VerifiedIdentity(email=email, claims=claims)
