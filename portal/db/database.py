from pymongo import AsyncMongoClient
from pymongo import ASCENDING, DESCENDING
from portal.config import settings

_timeout_ms = int(settings.STORE_TIMEOUT_SECONDS * 1000)

# client is lazy, no connection is made until the first operation
client = AsyncMongoClient(
    settings.DATABASE_URL,
    tz_aware=True,
    serverSelectionTimeoutMS=_timeout_ms,
    timeoutMS=_timeout_ms,
)
db = client[settings.DATABASE_NAME]


def get_db():
    return db


# create indexes once at startup
async def init_indexes(database=db):
    # quizzes
    # index 1, quiz id is the title, duplicate titles are rejected here
    await database.quizzes.create_index("quiz_id", unique=True, name="unique_quiz_id")

    # index 2, list_active_quizzes range filter
    await database.quizzes.create_index(
        [("open_time", ASCENDING), ("close_time", ASCENDING)],
        name="quiz_window"
    )

    # submissions, one ledger group per quiz
    # index 1, group upsert relies on this to stay single per quiz
    await database.submissions.create_index("quiz_id", unique=True, name="unique_ledger_group")

    # index 2, has_submitted / progress lookups by student
    await database.submissions.create_index("submissions.student_id", name="ledger_student_lookup")

    # leaderboard
    # index 1, award/deduct/search by username
    await database.leaderboard.create_index("username", unique=True, name="unique_username")

    # index 2, get_all sorted by points
    await database.leaderboard.create_index(
        [("points", DESCENDING), ("username", ASCENDING)],
        name="points_order"
    )
