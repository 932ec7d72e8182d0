from fastapi import APIRouter, Depends

from portal.api.dependencies.auth_dependencies import get_current_email
from portal.db.database import get_db
from portal.models.leaderboard import ProgressRecord
from portal.models.submission import StudentResult
from portal.services import progress, submission_ledger

results_router = APIRouter(tags=["results"])


@results_router.get("/results/{quiz_id:path}", response_model=StudentResult)
async def get_user_result(
    quiz_id: str,
    email: str = Depends(get_current_email),
    db=Depends(get_db)
):
    '''
    per question breakdown of the caller's submission
    submitted=false (not an error) when the caller never submitted this quiz
    '''
    return await submission_ledger.get_student_result(db, quiz_id, email)


@results_router.get("/progress", response_model=list[ProgressRecord])
async def get_own_progress(
    email: str = Depends(get_current_email),
    db=Depends(get_db)
):
    return await progress.get_progress(db, email)
