from pydantic import BaseModel, Field, model_validator
from typing import List
from datetime import datetime
from portal.models.fields import UTCDateTime
from uuid import uuid4


def new_question_id() -> str:
    return uuid4().hex[:12]


class Question(BaseModel):
    question_id: str = Field(default_factory=new_question_id)
    question: str
    options: List[str]
    answer: str # literal option text, not an index

    @model_validator(mode="after")
    def answer_among_options(self):
        if self.answer not in self.options:
            raise ValueError(f"answer {self.answer!r} is not one of the options")
        return self


class Quiz(BaseModel):
    quiz_id: str
    title: str
    questions: List[Question]
    open_time: UTCDateTime
    close_time: UTCDateTime

    def is_active(self, now: datetime) -> bool:
        return self.open_time <= now <= self.close_time
