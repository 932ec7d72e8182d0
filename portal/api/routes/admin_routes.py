# portal/api/routes/admin_routes.py
from fastapi import APIRouter, Depends

from portal.api.dependencies.auth_dependencies import get_admin_user
from portal.api.schemas.leaderboard_schemas import PointsUpdated
from portal.api.schemas.quiz_schemas import QuizCreate, QuizCreated
from portal.config import settings
from portal.db.database import get_db
from portal.models.leaderboard import LeaderboardEntry, ProgressRecord
from portal.models.quiz import Quiz
from portal.models.submission import StudentResult, Submission, SubmissionGroup
from portal.services import points_leaderboard, progress, quiz_catalog, submission_ledger

admin_router = APIRouter(
    prefix=settings.ADMIN_PREFIX,
    tags=["admin"],
    dependencies=[Depends(get_admin_user)] # only works for auth + admin user
)


@admin_router.post("/quizzes", response_model=QuizCreated)
async def create_quiz(payload: QuizCreate, db=Depends(get_db)):
    quiz_id = await quiz_catalog.create_quiz(
        db,
        payload.title,
        payload.questions,
        payload.open_time,
        payload.close_time
    )
    return QuizCreated(quiz_id=quiz_id)


@admin_router.get("/quizzes", response_model=list[Quiz])
async def get_all_quizzes(db=Depends(get_db)):
    return await quiz_catalog.list_all_quizzes(db)


@admin_router.get("/submissions", response_model=list[SubmissionGroup])
async def get_all_submissions(db=Depends(get_db)):
    return await submission_ledger.list_all_submissions(db)


@admin_router.get("/submissions/{quiz_id:path}", response_model=list[Submission])
async def get_quiz_submissions(quiz_id: str, db=Depends(get_db)):
    return await submission_ledger.get_submissions(db, quiz_id)


@admin_router.get("/progress/{email}", response_model=list[ProgressRecord])
async def get_student_progress(email: str, db=Depends(get_db)):
    return await progress.get_progress(db, email)


@admin_router.post("/leaderboard/{username}/award", response_model=PointsUpdated)
async def add_points(username: str, db=Depends(get_db)):
    points = await points_leaderboard.award(db, username)
    return PointsUpdated(username=username, points=points, message=f"{settings.POINTS_STEP} points added")


@admin_router.post("/leaderboard/{username}/deduct", response_model=PointsUpdated)
async def deduct_points(username: str, db=Depends(get_db)):
    points = await points_leaderboard.deduct(db, username)
    return PointsUpdated(username=username, points=points, message=f"{settings.POINTS_STEP} points deducted")


@admin_router.get("/leaderboard/search/{username}", response_model=LeaderboardEntry)
async def search_student(username: str, db=Depends(get_db)):
    return await points_leaderboard.search(db, username)


@admin_router.get("/results/{email}/{quiz_id:path}", response_model=StudentResult)
async def get_student_result(email: str, quiz_id: str, db=Depends(get_db)):
    return await submission_ledger.get_student_result(db, quiz_id, email)
