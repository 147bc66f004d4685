# bookreg/auth.py
"""
Service-account token exchange (OAuth2 JWT bearer grant).

The assertion is signed locally with the service account's PKCS8 key and
traded for a short-lived access token at the configured audience URL.
"""
import logging
import time
from typing import Optional

import requests
from google.auth import crypt, jwt

from .config import SheetConfig
from .errors import AuthError

logger = logging.getLogger(__name__)

GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"
TOKEN_LIFETIME = 3600


def build_claims(config: SheetConfig, now: Optional[int] = None) -> dict:
    iat = int(time.time()) if now is None else int(now)
    return {
        "iss": config.identity,
        "scope": config.scope,
        "aud": config.audience,
        "exp": iat + TOKEN_LIFETIME,
        "iat": iat,
    }


def build_assertion(config: SheetConfig, now: Optional[int] = None) -> str:
    """header.claims.signature, each part base64url without padding (RS256)."""
    signer = crypt.RSASigner.from_string(config.signing_key)
    token = jwt.encode(signer, build_claims(config, now), header={"alg": "RS256", "typ": "JWT"})
    return token.decode("ascii") if isinstance(token, bytes) else token


def get_access_token(config: SheetConfig, session=None, now: Optional[int] = None) -> str:
    http = session or requests
    try:
        assertion = build_assertion(config, now)
        r = http.post(
            config.audience,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            data=f"grant_type={GRANT_TYPE}&assertion={assertion}",
            timeout=config.timeout,
        )
        token = r.json()["access_token"]
    except Exception as e:
        logger.warning("Token exchange failed for %s: %s", config.identity, type(e).__name__)
        raise AuthError() from e
    if not token:
        raise AuthError()
    logger.info("Obtained access token for %s", config.identity)
    return token
