from pydantic import BaseModel
from typing import Dict, List, Literal, Optional
from portal.models.fields import UTCDateTime


class Submission(BaseModel):
    quiz_id: str
    student_id: str # email, stable key
    student_name: str # frozen at submission time
    answers: Dict[str, int]
    # key convention the answers were written in, records predating it are positional
    answer_key_scheme: Literal["positional", "question_id"] = "positional"
    score: int
    submitted_at: UTCDateTime


class SubmissionGroup(BaseModel):
    quiz_id: str
    submissions: List[Submission] = []


class GradedAnswer(BaseModel):
    question: str
    user_answer: str # empty when missing or out of range
    correct_answer: str
    is_correct: bool


class StudentResult(BaseModel):
    quiz_id: str
    submitted: bool
    score: Optional[int] = None
    submitted_at: Optional[UTCDateTime] = None
    answers: List[GradedAnswer] = []
