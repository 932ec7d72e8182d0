'''
read-only adapter over the user directory (users collection, owned by registration)
users are keyed by email
'''

import logging
from typing import Dict, Iterable

from pydantic import ValidationError as ModelValidationError

from portal.db.store import guarded
from portal.errors import NotFound, StoreError
from portal.models.user import UserRecord

logger = logging.getLogger(__name__)


async def resolve_by_id(db, student_id: str) -> UserRecord:
    doc = await guarded(
        db.users.find_one({"email": student_id}, projection={"_id": 0, "email": 1, "username": 1, "role": 1}),
        "user lookup"
    )
    if not doc:
        raise NotFound(f"Student {student_id} not found")

    try:
        return UserRecord.model_validate(doc)
    except ModelValidationError as e:
        # eg a role outside the closed set
        logger.error(f"malformed user record for {student_id}: {e}")
        raise StoreError(f"User record for {student_id} is malformed") from e


async def resolve_usernames(db, student_ids: Iterable[str]) -> Dict[str, str]:
    """email -> username, unknown ids are left out"""
    ids = list(set(student_ids))
    if not ids:
        return {}

    docs = await guarded(
        db.users.find({"email": {"$in": ids}}, projection={"_id": 0, "email": 1, "username": 1}).to_list(None),
        "username lookup"
    )
    return {d["email"]: d["username"] for d in docs if d.get("username")}
