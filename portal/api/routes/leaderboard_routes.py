from fastapi import APIRouter, Depends

from portal.api.dependencies.auth_dependencies import get_current_email
from portal.db.database import get_db
from portal.models.leaderboard import LeaderboardEntry, RankedEntry, UserStats
from portal.services import points_leaderboard, quiz_leaderboard, users

leaderboard_router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@leaderboard_router.get("", response_model=list[LeaderboardEntry])
async def get_leaderboard(db=Depends(get_db)):
    # ties on points are ordered by username
    return await points_leaderboard.get_all(db)


@leaderboard_router.get("/me", response_model=UserStats)
async def get_my_stats(
    email: str = Depends(get_current_email),
    db=Depends(get_db)
):
    user = await users.resolve_by_id(db, email)
    return await points_leaderboard.get_current_user_stats(db, user.username, email=email)


@leaderboard_router.get("/quiz/{quiz_id:path}", response_model=list[RankedEntry])
async def get_quiz_leaderboard(quiz_id: str, db=Depends(get_db)):
    return await quiz_leaderboard.rank(db, quiz_id)
