from pydantic import BaseModel, Field
from typing import List
from datetime import datetime


class QuestionCreate(BaseModel):
    question: str
    options: List[str] = Field(..., min_length=1)
    answer: str


class QuizCreate(BaseModel):
    title: str
    questions: List[QuestionCreate]
    # kept as strings, the catalog parses them and reports its own validation error
    open_time: str
    close_time: str


class QuizCreated(BaseModel):
    quiz_id: str
    message: str = "Quiz created successfully"


class QuestionOut(BaseModel):
    question_id: str
    question: str
    options: List[str]


class ActiveQuiz(BaseModel):
    """what students see, correct answers left out"""
    quiz_id: str
    title: str
    questions: List[QuestionOut]
    open_time: datetime
    close_time: datetime
