'''
global points leaderboard

points only move through award/deduct (or the zero entry created on first touch),
quiz scores never feed into it

order everywhere: points descending, then username ascending
'''

import logging
from typing import List, Optional

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from portal.config import settings
from portal.db.store import guarded
from portal.errors import NotFound
from portal.models.leaderboard import LeaderboardEntry, UserStats

logger = logging.getLogger(__name__)

LEADERBOARD_ORDER = [("points", DESCENDING), ("username", ASCENDING)]


async def _change_points(db, username: str, delta: int) -> int:
    # unknown usernames get an entry, so N awards and M deductions always give step * (N - M)
    try:
        doc = await guarded(
            db.leaderboard.find_one_and_update(
                {"username": username},
                {"$inc": {"points": delta}},
                upsert=True,
                return_document=ReturnDocument.AFTER,
                projection={"_id": 0}
            ),
            "update points"
        )
    except DuplicateKeyError:
        # lost an upsert race with the first touch of the same username, the entry exists now
        doc = await guarded(
            db.leaderboard.find_one_and_update(
                {"username": username},
                {"$inc": {"points": delta}},
                return_document=ReturnDocument.AFTER,
                projection={"_id": 0}
            ),
            "update points"
        )
    logger.info(f"points for {username} changed by {delta:+d}, now {doc['points']}")
    return doc["points"]


async def award(db, username: str) -> int:
    return await _change_points(db, username, settings.POINTS_STEP)


async def deduct(db, username: str) -> int:
    # no floor, totals can go negative
    return await _change_points(db, username, -settings.POINTS_STEP)


async def get_all(db) -> List[LeaderboardEntry]:
    docs = await guarded(
        db.leaderboard.find({}, projection={"_id": 0}, sort=LEADERBOARD_ORDER).to_list(None),
        "list leaderboard"
    )
    return [LeaderboardEntry.model_validate(d) for d in docs]


async def search(db, username: str) -> LeaderboardEntry:
    doc = await guarded(db.leaderboard.find_one({"username": username}, projection={"_id": 0}), "leaderboard lookup")
    if not doc:
        raise NotFound(f"Student {username} not found in leaderboard")
    return LeaderboardEntry.model_validate(doc)


async def get_current_user_stats(db, username: str, email: Optional[str] = None) -> UserStats:
    first_touch = {"username": username, "points": 0}
    if email:
        first_touch["email"] = email

    try:
        await guarded(
            db.leaderboard.update_one({"username": username}, {"$setOnInsert": first_touch}, upsert=True),
            "init leaderboard entry"
        )
    except DuplicateKeyError:
        pass

    entry = await search(db, username)

    total_users = await guarded(db.leaderboard.count_documents({}), "count leaderboard")

    # everyone strictly ahead in LEADERBOARD_ORDER
    ahead = await guarded(
        db.leaderboard.count_documents({"$or": [
            {"points": {"$gt": entry.points}},
            {"points": entry.points, "username": {"$lt": username}},
        ]}),
        "leaderboard rank"
    )

    return UserStats(stats=entry, rank=ahead + 1, total_users=total_users)
