'''
scoring engine, pure functions only

answers map an answer key to the index of the chosen option
- positional scheme (legacy, default): key is "q{i}", i = position of the question in the quiz
- question_id scheme: key is the question's stable question_id

reordering questions breaks positional keys for existing submissions, question_id keys survive it
'''

from typing import Dict, List, Mapping, Optional

from portal.config import settings
from portal.models.quiz import Question, Quiz
from portal.models.submission import GradedAnswer

POSITIONAL = "positional"
QUESTION_ID = "question_id"


def answer_key(position: int, question: Question, scheme: Optional[str] = None) -> str:
    scheme = scheme or settings.ANSWER_KEY_SCHEME
    if scheme == QUESTION_ID:
        return question.question_id
    return f"q{position}"


def known_answers(quiz: Quiz, answers: Mapping[str, int], scheme: Optional[str] = None) -> Dict[str, int]:
    """only the entries keyed by one of the quiz's answer keys, everything else is dropped"""
    keys = {answer_key(position, question, scheme) for position, question in enumerate(quiz.questions)}
    return {k: v for k, v in answers.items() if k in keys}


def selected_option(question: Question, index) -> Optional[str]:
    """option text at index, None for missing, non integer or out of range indices"""
    # bool is an int subclass, True must not select option 1
    if isinstance(index, bool) or not isinstance(index, int):
        return None
    if 0 <= index < len(question.options):
        return question.options[index]
    return None


def grade(quiz: Quiz, answers: Mapping[str, int], scheme: Optional[str] = None) -> List[GradedAnswer]:
    graded = []
    for position, question in enumerate(quiz.questions):
        chosen = selected_option(question, answers.get(answer_key(position, question, scheme)))
        graded.append(GradedAnswer(
            question=question.question,
            user_answer=chosen or "",
            correct_answer=question.answer,
            is_correct=chosen is not None and chosen == question.answer,
        ))
    return graded


def score(quiz: Quiz, answers: Mapping[str, int], scheme: Optional[str] = None) -> int:
    # 0 <= score <= len(quiz.questions)
    return sum(1 for g in grade(quiz, answers, scheme) if g.is_correct)
