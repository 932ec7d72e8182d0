'''
submission ledger, one document per quiz holding every submission for it

{"quiz_id": ..., "submissions": [{student_id, student_name, answers, score, submitted_at}, ...]}

at most one submission per (quiz, student), enforced by the conditional append in submit(),
the read before it only gives an early and cheap rejection
'''

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pymongo.errors import DuplicateKeyError

from portal.config import settings
from portal.db.store import guarded
from portal.errors import Conflict, Forbidden, NotFound
from portal.models.fields import bson_time
from portal.models.submission import StudentResult, Submission, SubmissionGroup
from portal.services import quiz_catalog, scoring, users

logger = logging.getLogger(__name__)


def find_submission(group: Optional[dict], student_id: str) -> Optional[dict]:
    if not group:
        return None
    for sub in group.get("submissions", []):
        if sub.get("student_id") == student_id:
            return sub
    return None


async def get_group(db, quiz_id: str) -> Optional[dict]:
    return await guarded(
        db.submissions.find_one({"quiz_id": quiz_id}, projection={"_id": 0}),
        "ledger lookup"
    )


async def ensure_group(db, quiz_id: str) -> None:
    # idempotent, a concurrent creator winning the race is fine
    try:
        await guarded(
            db.submissions.update_one(
                {"quiz_id": quiz_id},
                {"$setOnInsert": {"quiz_id": quiz_id, "submissions": []}},
                upsert=True
            ),
            "create ledger group"
        )
    except DuplicateKeyError:
        pass


async def submit(db, quiz_id: str, student_id: str, answers: Dict[str, int]) -> int:
    user = await users.resolve_by_id(db, student_id)
    if user.is_admin:
        raise Forbidden("Admins cannot submit quizzes")

    quiz = await quiz_catalog.get_quiz(db, quiz_id)

    if find_submission(await get_group(db, quiz_id), student_id):
        logger.info(f"rejected duplicate submission for quiz {quiz_id!r} by {student_id}")
        raise Conflict("You have already submitted this quiz")

    scheme = settings.ANSWER_KEY_SCHEME
    answers = scoring.known_answers(quiz, answers, scheme)
    score = scoring.score(quiz, answers, scheme)

    submission = Submission(
        quiz_id=quiz_id,
        student_id=student_id,
        student_name=user.display_name,
        answers=answers,
        answer_key_scheme=scheme,
        score=score,
        submitted_at=datetime.now(timezone.utc),
    )

    doc = submission.model_dump()
    doc["submitted_at"] = bson_time(submission.submitted_at)

    await ensure_group(db, quiz_id)

    # append only if no element for this student exists yet, atomic on the group document
    result = await guarded(
        db.submissions.update_one(
            {"quiz_id": quiz_id, "submissions.student_id": {"$ne": student_id}},
            {"$push": {"submissions": doc}}
        ),
        "save submission"
    )
    if result.matched_count == 0:
        logger.info(f"concurrent duplicate submission for quiz {quiz_id!r} by {student_id}")
        raise Conflict("You have already submitted this quiz")

    logger.info(f"{student_id} submitted quiz {quiz_id!r}, score {score}/{len(quiz.questions)}")
    return score


async def get_submissions(db, quiz_id: str) -> List[Submission]:
    group = await get_group(db, quiz_id)
    if not group:
        raise NotFound(f"No submissions found for quiz {quiz_id!r}")
    return SubmissionGroup.model_validate(group).submissions


async def list_all_submissions(db) -> List[SubmissionGroup]:
    docs = await guarded(db.submissions.find({}, projection={"_id": 0}).to_list(None), "list submissions")
    return [SubmissionGroup.model_validate(d) for d in docs]


async def has_submitted(db, quiz_id: str, student_id: str) -> bool:
    # no group for the quiz is a plain "no", not an error
    return find_submission(await get_group(db, quiz_id), student_id) is not None


async def get_student_result(db, quiz_id: str, student_id: str) -> StudentResult:
    group = await get_group(db, quiz_id)
    if not group:
        raise NotFound(f"No submissions found for quiz {quiz_id!r}")

    raw = find_submission(group, student_id)
    if raw is None:
        return StudentResult(quiz_id=quiz_id, submitted=False)

    submission = Submission.model_validate(raw)
    quiz = await quiz_catalog.get_quiz(db, quiz_id)

    return StudentResult(
        quiz_id=quiz_id,
        submitted=True,
        score=submission.score,
        submitted_at=submission.submitted_at,
        answers=scoring.grade(quiz, submission.answers, submission.answer_key_scheme),
    )
