import jwt
from datetime import datetime, timedelta, timezone
from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError, VerificationError, InvalidHashError
from foodorders.core.config import JWT_SECRET, JWT_ALGORITHM, JWT_EXP_MINUTES

ph = PasswordHasher()


def hash_pw(p: str) -> str:
    return ph.hash(p)


def verify_pw(hashv: str, p: str) -> bool:
    try:
        return ph.verify(hashv, p)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def create_token(sub: str, token_version: int) -> str:
    """Issues a personnel token bound to the current tokenVersion epoch."""
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=JWT_EXP_MINUTES)
    payload = {"sub": sub, "ver": token_version, "iat": int(now.timestamp()), "exp": int(exp.timestamp())}
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """Raises jwt.InvalidTokenError (or a subclass) on bad signature, expiry or missing claims."""
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM], options={"require": ["sub", "ver", "exp"]})
