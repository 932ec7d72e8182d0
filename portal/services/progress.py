from typing import List

from portal.db.store import guarded
from portal.models.leaderboard import ProgressRecord
from portal.services import quiz_catalog
from portal.services.submission_ledger import find_submission


async def get_progress(db, student_id: str) -> List[ProgressRecord]:
    '''
    submitted / missed status of one student for every quiz in the catalog, active or not

    a quiz with no ledger group, or a group without this student, counts as missed
    '''
    quizzes = await quiz_catalog.list_all_quizzes(db)
    if not quizzes:
        return []

    # one query for every ledger group instead of one per quiz
    groups = await guarded(
        db.submissions.find(
            {"quiz_id": {"$in": [q.quiz_id for q in quizzes]}},
            projection={"_id": 0}
        ).to_list(None),
        "progress ledger lookup"
    )
    by_quiz = {g["quiz_id"]: g for g in groups}

    progress = []
    for quiz in quizzes:
        sub = find_submission(by_quiz.get(quiz.quiz_id), student_id)
        if sub is None:
            progress.append(ProgressRecord(quiz_id=quiz.quiz_id, title=quiz.title, status="missed"))
            continue

        progress.append(ProgressRecord(
            quiz_id=quiz.quiz_id,
            title=quiz.title,
            status="submitted",
            score=sub["score"],
            submitted_at=sub["submitted_at"],
        ))

    return progress
