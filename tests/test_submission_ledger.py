import asyncio
from datetime import datetime

import pytest

from portal.config import settings
from portal.errors import Conflict, Forbidden, NotFound, StoreError
from portal.services import quiz_catalog, submission_ledger

ALL_RIGHT = {"q0": 1, "q1": 0, "q2": 2}


@pytest.fixture
async def algebra(db, add_user, make_quiz):
    await add_user("alice@school.test", "alice")
    await add_user("bob@school.test", "bob")
    await add_user("teacher@school.test", "teacher", role="admin")
    return await make_quiz("Algebra1")


class TestSubmit:
    async def test_returns_score(self, db, algebra):
        assert await submission_ledger.submit(db, algebra, "alice@school.test", ALL_RIGHT) == 3

    async def test_out_of_range_index(self, db, algebra):
        assert await submission_ledger.submit(db, algebra, "alice@school.test", {"q0": 9}) == 0

    async def test_stores_frozen_name_and_score(self, db, algebra):
        await submission_ledger.submit(db, algebra, "alice@school.test", {"q0": 1})
        # renaming afterwards does not touch the stored submission
        await db.users.update_one({"email": "alice@school.test"}, {"$set": {"username": "alice2"}})

        [sub] = await submission_ledger.get_submissions(db, algebra)
        assert sub.student_id == "alice@school.test"
        assert sub.student_name == "alice"
        assert sub.score == 1
        assert sub.answers == {"q0": 1}
        assert sub.submitted_at.tzinfo is not None

    async def test_second_submission_conflicts(self, db, algebra):
        assert await submission_ledger.submit(db, algebra, "alice@school.test", {"q0": 1}) == 1

        with pytest.raises(Conflict, match="already submitted"):
            await submission_ledger.submit(db, algebra, "alice@school.test", ALL_RIGHT)

        [sub] = await submission_ledger.get_submissions(db, algebra)
        assert sub.score == 1

    async def test_unknown_student(self, db, algebra):
        with pytest.raises(NotFound, match="Student"):
            await submission_ledger.submit(db, algebra, "ghost@school.test", ALL_RIGHT)

    async def test_admin_cannot_submit(self, db, algebra):
        with pytest.raises(Forbidden):
            await submission_ledger.submit(db, algebra, "teacher@school.test", ALL_RIGHT)
        assert not await submission_ledger.has_submitted(db, algebra, "teacher@school.test")

    async def test_unknown_quiz(self, db, algebra):
        with pytest.raises(NotFound, match="Quiz"):
            await submission_ledger.submit(db, "Calculus", "alice@school.test", ALL_RIGHT)

    async def test_groups_by_quiz_in_submission_order(self, db, algebra, make_quiz):
        await make_quiz("Algebra2")
        await submission_ledger.submit(db, algebra, "bob@school.test", {})
        await submission_ledger.submit(db, algebra, "alice@school.test", ALL_RIGHT)
        await submission_ledger.submit(db, "Algebra2", "alice@school.test", {})

        groups = await submission_ledger.list_all_submissions(db)
        assert {g.quiz_id: [s.student_id for s in g.submissions] for g in groups} == {
            "Algebra1": ["bob@school.test", "alice@school.test"],
            "Algebra2": ["alice@school.test"],
        }

    async def test_concurrent_first_submissions_both_land(self, db, algebra):
        scores = await asyncio.gather(
            submission_ledger.submit(db, algebra, "alice@school.test", ALL_RIGHT),
            submission_ledger.submit(db, algebra, "bob@school.test", {}),
        )
        assert scores == [3, 0]
        assert len(await submission_ledger.get_submissions(db, algebra)) == 2

    async def test_concurrent_duplicates_admit_one(self, db, algebra):
        results = await asyncio.gather(
            submission_ledger.submit(db, algebra, "alice@school.test", ALL_RIGHT),
            submission_ledger.submit(db, algebra, "alice@school.test", {}),
            return_exceptions=True,
        )
        assert sum(isinstance(r, Conflict) for r in results) == 1
        assert sum(isinstance(r, int) for r in results) == 1
        assert len(await submission_ledger.get_submissions(db, algebra)) == 1


class TestLookups:
    async def test_get_submissions_without_group(self, db, algebra):
        with pytest.raises(NotFound):
            await submission_ledger.get_submissions(db, algebra)

    async def test_has_submitted(self, db, algebra):
        # no group yet is a plain no
        assert await submission_ledger.has_submitted(db, algebra, "alice@school.test") is False

        await submission_ledger.submit(db, algebra, "alice@school.test", ALL_RIGHT)
        assert await submission_ledger.has_submitted(db, algebra, "alice@school.test") is True
        assert await submission_ledger.has_submitted(db, algebra, "bob@school.test") is False


class TestStudentResult:
    async def test_breakdown(self, db, algebra):
        await submission_ledger.submit(db, algebra, "alice@school.test", {"q0": 1, "q1": 2, "q2": 42})

        result = await submission_ledger.get_student_result(db, algebra, "alice@school.test")
        assert result.submitted is True
        assert result.score == 1
        assert result.submitted_at is not None
        assert [(a.user_answer, a.correct_answer, a.is_correct) for a in result.answers] == [
            ("2", "2", True),
            ("3", "1", False),
            ("", "3", False),
        ]

    async def test_not_submitted(self, db, algebra):
        await submission_ledger.submit(db, algebra, "bob@school.test", {})

        result = await submission_ledger.get_student_result(db, algebra, "alice@school.test")
        assert result.submitted is False
        assert result.answers == []

    async def test_no_group(self, db, algebra):
        with pytest.raises(NotFound):
            await submission_ledger.get_student_result(db, algebra, "alice@school.test")


class TestUserRecords:
    async def test_role_outside_closed_set(self, db, add_user, make_quiz):
        await make_quiz("Algebra1")
        await add_user("odd@school.test", "odd", role="superuser")
        with pytest.raises(StoreError, match="malformed"):
            await submission_ledger.submit(db, "Algebra1", "odd@school.test", ALL_RIGHT)

    async def test_missing_role_means_student(self, db, make_quiz):
        await make_quiz("Algebra1")
        await db.users.insert_one({"email": "plain@school.test", "username": "plain"})
        assert await submission_ledger.submit(db, "Algebra1", "plain@school.test", ALL_RIGHT) == 3


class TestAnswerKeys:
    async def test_result_graded_with_scheme_of_submission(self, db, algebra, monkeypatch):
        await submission_ledger.submit(db, algebra, "alice@school.test", ALL_RIGHT)

        monkeypatch.setattr(settings, "ANSWER_KEY_SCHEME", "question_id")
        result = await submission_ledger.get_student_result(db, algebra, "alice@school.test")

        assert result.score == 3
        assert [a.is_correct for a in result.answers] == [True, True, True]

    async def test_question_id_submission_survives_switch_back(self, db, algebra, monkeypatch):
        quiz = await quiz_catalog.get_quiz(db, algebra)
        by_id = {q.question_id: i for q, i in zip(quiz.questions, [1, 0, 2])}

        monkeypatch.setattr(settings, "ANSWER_KEY_SCHEME", "question_id")
        assert await submission_ledger.submit(db, algebra, "alice@school.test", by_id) == 3

        monkeypatch.setattr(settings, "ANSWER_KEY_SCHEME", "positional")
        [sub] = await submission_ledger.get_submissions(db, algebra)
        assert sub.answer_key_scheme == "question_id"
        result = await submission_ledger.get_student_result(db, algebra, "alice@school.test")
        assert [a.is_correct for a in result.answers] == [True, True, True]

    async def test_unknown_keys_are_not_stored(self, db, algebra):
        junk = {f"junk{i}": i for i in range(500)}
        answers = {**ALL_RIGHT, **junk, "$set": 1, "q7": 0}

        assert await submission_ledger.submit(db, algebra, "alice@school.test", answers) == 3

        [sub] = await submission_ledger.get_submissions(db, algebra)
        assert sub.answers == ALL_RIGHT

    async def test_records_without_scheme_read_as_positional(self, db, algebra):
        await db.submissions.insert_one({"quiz_id": algebra, "submissions": [{
            "quiz_id": algebra,
            "student_id": "alice@school.test",
            "student_name": "alice",
            "answers": ALL_RIGHT,
            "score": 3,
            "submitted_at": datetime(2026, 10, 19, 11, 0),
        }]})

        result = await submission_ledger.get_student_result(db, algebra, "alice@school.test")
        assert [a.is_correct for a in result.answers] == [True, True, True]
