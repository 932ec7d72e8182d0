from fastapi import APIRouter, Depends

from portal.api.dependencies.auth_dependencies import get_current_email
from portal.api.schemas.quiz_schemas import ActiveQuiz
from portal.api.schemas.submission_schemas import SubmitRequest, SubmitResponse, SubmittedCheck
from portal.db.database import get_db
from portal.services import quiz_catalog, submission_ledger

quiz_router = APIRouter(prefix="/quizzes", tags=["quizzes"])


@quiz_router.get("/active", response_model=list[ActiveQuiz])
async def get_active_quizzes(db=Depends(get_db)):
    # server clock decides what is open
    quizzes = await quiz_catalog.list_active_quizzes(db)
    return [ActiveQuiz.model_validate(q.model_dump()) for q in quizzes]


@quiz_router.post("/submit", response_model=SubmitResponse)
async def submit_quiz(
    payload: SubmitRequest,
    email: str = Depends(get_current_email),
    db=Depends(get_db)
):
    score = await submission_ledger.submit(db, payload.quiz_id, email, payload.answers)
    return SubmitResponse(score=score)


@quiz_router.get("/submitted", response_model=SubmittedCheck)
async def check_submission(
    quiz_id: str,
    email: str = Depends(get_current_email),
    db=Depends(get_db)
):
    return SubmittedCheck(submitted=await submission_ledger.has_submitted(db, quiz_id, email))
