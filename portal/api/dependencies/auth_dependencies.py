from jwt import decode, ExpiredSignatureError, InvalidTokenError
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from portal.config import settings
from portal.db.database import get_db
from portal.errors import Forbidden, NotFound
from portal.models.user import UserRecord
from portal.services import users

security = HTTPBearer()


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)) -> dict:
    try:
        payload = decode(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired")
    except InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")

    if not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid token data")
    return payload


async def get_current_email(user: dict = Depends(get_current_user)) -> str:
    return user["sub"]


async def get_admin_user(
    email: str = Depends(get_current_email),
    db=Depends(get_db)
) -> UserRecord:
    try:
        record = await users.resolve_by_id(db, email)
    except NotFound:
        raise Forbidden("Admin access required")
    if not record.is_admin:
        raise Forbidden("Admin access required")
    return record
