"""
Anti-forgery tokens for the filter endpoint.

Tokens are HS256-signed JWTs bound to an action name with a limited
lifetime. They are handed to the page through the widget's script
configuration and echoed back in the ``nonce`` form field.
"""

import logging
import time
from typing import Any, Dict, Optional

import jwt

from ..config.constants import NONCE_LIFETIME_SECONDS
from ..exceptions import AuthFailureError

logger = logging.getLogger(__name__)

ALGORITHM = 'HS256'


class NonceService:
    """Issues and verifies action-bound anti-forgery tokens."""

    def __init__(self, secret: str, lifetime_seconds: int = NONCE_LIFETIME_SECONDS):
        """
        Initialize nonce service.

        Args:
            secret: Signing key
            lifetime_seconds: Token validity

        Raises:
            ValueError: If the secret is empty
        """
        if not secret:
            raise ValueError('NONCE_SECRET must be configured')
        self.secret = secret
        self.lifetime_seconds = lifetime_seconds

    def create(self, action: str) -> str:
        """
        Issue a token for an action.

        Args:
            action: Action the token authorizes

        Returns:
            Encoded token
        """
        now = int(time.time())
        claims = {
            'action': action,
            'iat': now,
            'exp': now + self.lifetime_seconds,
        }
        return jwt.encode(claims, self.secret, algorithm=ALGORITHM)

    def verify(self, token: Optional[str], action: str) -> Dict[str, Any]:
        """
        Verify a token for an action.

        Args:
            token: Token from the request
            action: Action being performed

        Returns:
            Decoded claims

        Raises:
            AuthFailureError: If the token is missing, invalid, expired or
                issued for another action
        """
        if not token:
            raise AuthFailureError('Missing security token')

        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                options={'require': ['exp', 'iat']},
            )
        except jwt.ExpiredSignatureError as e:
            logger.warning('Security token expired')
            raise AuthFailureError('Security token expired') from e
        except jwt.PyJWTError as e:
            logger.warning(f'Security token rejected: {e}')
            raise AuthFailureError('Invalid security token') from e

        if claims.get('action') != action:
            logger.warning(f"Security token issued for {claims.get('action')!r}, not {action!r}")
            raise AuthFailureError('Invalid security token')

        return claims
