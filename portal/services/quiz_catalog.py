import logging
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Union

from pydantic import BaseModel, ValidationError as ModelValidationError
from pymongo.errors import DuplicateKeyError

from portal.db.store import guarded
from portal.errors import Conflict, NotFound, ValidationError
from portal.models.fields import as_utc, bson_time
from portal.models.quiz import Question, Quiz

logger = logging.getLogger(__name__)

QUIZ_PROJECTION = {"_id": 0, "created_at": 0}


def parse_timestamp(value: Union[str, datetime], field: str) -> datetime:
    '''
    ISO-8601 string or datetime -> aware utc datetime
    a trailing Z is accepted, naive values are taken as utc
    '''
    if isinstance(value, datetime):
        return as_utc(value)
    try:
        parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {field} format, expected ISO-8601") from e
    return as_utc(parsed)


def build_question(raw: Any) -> Question:
    data = raw.model_dump() if isinstance(raw, BaseModel) else dict(raw)
    # ids are always assigned here, never taken from the client
    data.pop("question_id", None)
    try:
        return Question.model_validate(data)
    except ModelValidationError as e:
        raise ValidationError(f"Invalid question {data.get('question')!r}: {e.errors()[0]['msg']}") from e


async def create_quiz(
    db,
    title: str,
    questions: Iterable[Any],
    open_time: Union[str, datetime],
    close_time: Union[str, datetime]
) -> str:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Quiz title is required")

    start = parse_timestamp(open_time, "open time")
    end = parse_timestamp(close_time, "close time")
    if start >= end:
        raise ValidationError("Quiz open time must be before close time")

    built = [build_question(q) for q in questions]
    if not built:
        raise ValidationError("Quiz needs at least one question")

    # quiz id is the title, unique index turns a repeated title into a conflict
    quiz = Quiz(quiz_id=title, title=title, questions=built, open_time=start, close_time=end)
    doc = quiz.model_dump()
    doc["open_time"] = bson_time(start)
    doc["close_time"] = bson_time(end)
    doc["created_at"] = bson_time(datetime.now(timezone.utc))

    try:
        await guarded(db.quizzes.insert_one(doc), "create quiz")
    except DuplicateKeyError as e:
        raise Conflict(f"Quiz {title!r} already exists") from e

    logger.info(f"created quiz {quiz.quiz_id!r} with {len(built)} questions, open {start.isoformat()} - {end.isoformat()}")
    return quiz.quiz_id


async def list_active_quizzes(db, now: Optional[datetime] = None) -> List[Quiz]:
    now = as_utc(now) if now else datetime.now(timezone.utc)
    instant = bson_time(now)
    docs = await guarded(
        db.quizzes.find(
            {"open_time": {"$lte": instant}, "close_time": {"$gte": instant}},
            projection=QUIZ_PROJECTION
        ).to_list(None),
        "list active quizzes"
    )
    return [Quiz.model_validate(d) for d in docs]


async def list_all_quizzes(db) -> List[Quiz]:
    docs = await guarded(db.quizzes.find({}, projection=QUIZ_PROJECTION).to_list(None), "list quizzes")
    return [Quiz.model_validate(d) for d in docs]


async def get_quiz(db, quiz_id: str) -> Quiz:
    doc = await guarded(db.quizzes.find_one({"quiz_id": quiz_id}, projection=QUIZ_PROJECTION), "quiz lookup")
    if not doc:
        raise NotFound(f"Quiz {quiz_id!r} not found")
    return Quiz.model_validate(doc)
