# shopcart/services/session_authority.py
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import uuid
from typing import Callable

import jwt

from shopcart.domain.errors import UnauthenticatedError
from shopcart.utils.settings import JWT_SECRET, SESSION_TTL_SECONDS

ALGORITHM = "HS256"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionClaims:
    user_id: int
    issued_at: datetime
    expires_at: datetime


class SessionAuthority:
    """
    Wydaje i weryfikuje podpisane tokeny sesji (JWT HS256).

    verify sprawdza tylko podpis i waznosc. Porownanie z tokenem zapisanym
    na userze (jedna sesja) robi UserService.authenticate.
    """

    def __init__(
        self,
        secret: str | None = None,
        ttl_seconds: int | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.secret = secret or JWT_SECRET
        self.ttl = timedelta(seconds=ttl_seconds or SESSION_TTL_SECONDS)
        self.clock = clock

    def issue(self, user_id: int) -> str:
        now = self.clock()
        payload = {
            "sub": str(user_id),
            "user_id": user_id,
            "iat": now.timestamp(),
            #float NumericDate, bez obcinania do pelnej sekundy
            "exp": (now + self.ttl).timestamp(),
            #losowe jti, dwa logowania w tej samej sekundzie daja rozne tokeny
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def decode(self, token: str | None) -> SessionClaims:
        if not token or not token.strip():
            raise UnauthenticatedError("missing")

        try:
            #exp sprawdzamy sami wzgledem self.clock
            payload = jwt.decode(
                token.strip(),
                self.secret,
                algorithms=[ALGORITHM],
                options={"require": ["sub", "iat", "exp"], "verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidSignatureError:
            raise UnauthenticatedError("bad_signature")
        except jwt.InvalidTokenError:
            raise UnauthenticatedError("malformed")

        try:
            user_id = int(payload["sub"])
            issued_ts = float(payload["iat"])
            expires_ts = float(payload["exp"])
            issued_at = datetime.fromtimestamp(issued_ts, timezone.utc)
            expires_at = datetime.fromtimestamp(expires_ts, timezone.utc)
        except (TypeError, ValueError, OverflowError, OSError):
            raise UnauthenticatedError("malformed")

        if self.clock().timestamp() >= expires_ts:
            raise UnauthenticatedError("expired")

        return SessionClaims(user_id=user_id, issued_at=issued_at, expires_at=expires_at)

    def verify(self, token: str | None) -> int:
        return self.decode(token).user_id
