"""Caller identity and the JWT identity provider."""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import jwt


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated caller. ``uid`` is an opaque, non-empty identifier."""

    uid: str


class JWTIdentityProvider:
    """Resolve bearer tokens to caller identities."""

    def __init__(
        self,
        secret: str,
        algorithms: Sequence[str] = ("HS256",),
        audience: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.secret = secret
        self.algorithms = list(algorithms)
        self.audience = audience
        self.logger = logger or logging.getLogger(__name__)

    def identify(self, token: Optional[str]) -> Optional[CallerIdentity]:
        """Decode ``token`` and return the caller, or None if it can't be trusted.

        The subject comes from the ``sub`` claim, falling back to ``uid``.
        """
        if not token:
            return None

        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=self.algorithms,
                audience=self.audience,
                options={"verify_aud": self.audience is not None},
            )
        except jwt.PyJWTError as e:
            self.logger.info(f"Rejected bearer token: {e}")
            return None

        uid = payload.get("sub") or payload.get("uid")
        if not uid or not isinstance(uid, str):
            self.logger.info("Rejected bearer token without a subject")
            return None

        return CallerIdentity(uid=uid)

    def issue(self, uid: str, **claims) -> str:
        """Encode a token for ``uid`` (used by the CLI and tests)."""
        payload = {"sub": uid, **claims}
        if self.audience is not None:
            payload.setdefault("aud", self.audience)
        return jwt.encode(payload, self.secret, algorithm=self.algorithms[0])
