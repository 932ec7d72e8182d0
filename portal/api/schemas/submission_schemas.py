from pydantic import BaseModel
from typing import Dict


class SubmitRequest(BaseModel):
    quiz_id: str
    # "q0", "q1", ... or question ids, depending on ANSWER_KEY_SCHEME
    answers: Dict[str, int]


class SubmitResponse(BaseModel):
    message: str = "Quiz submitted successfully"
    score: int


class SubmittedCheck(BaseModel):
    submitted: bool
