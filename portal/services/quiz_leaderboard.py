from typing import List

from portal.models.leaderboard import RankedEntry
from portal.services import submission_ledger, users


async def rank(db, quiz_id: str) -> List[RankedEntry]:
    '''
    ranked view of one quiz, highest score first
    sorted() is stable, so equal scores keep submission order
    '''
    submissions = await submission_ledger.get_submissions(db, quiz_id)
    ordered = sorted(submissions, key=lambda s: s.score, reverse=True)

    usernames = await users.resolve_usernames(db, (s.student_id for s in ordered))

    return [
        RankedEntry(
            rank=position,
            username=usernames.get(sub.student_id, sub.student_id), # fallback to raw id
            student_id=sub.student_id,
            score=sub.score,
            submitted_at=sub.submitted_at,
        )
        for position, sub in enumerate(ordered, 1)
    ]
