from datetime import datetime, timedelta, timezone
import jwt

from portal.config import settings


def create_token(email: str, expires_minutes: int = None) -> str:
    '''
    tokens are issued by the user directory in production, this mirrors its claims
    sub is the user's email, the stable student id used across the ledger
    '''
    expires = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    data = {"sub": email, "exp": expires}
    return jwt.encode(data, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
