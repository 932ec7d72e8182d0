from pydantic import BaseModel
from typing import Literal, Optional
from portal.models.fields import UTCDateTime


class LeaderboardEntry(BaseModel):
    username: str
    points: int = 0
    email: Optional[str] = None


class UserStats(BaseModel):
    stats: LeaderboardEntry
    rank: int
    total_users: int


class RankedEntry(BaseModel):
    rank: int
    username: str
    student_id: str
    score: int
    submitted_at: UTCDateTime


class ProgressRecord(BaseModel):
    quiz_id: str
    title: str
    status: Literal["submitted", "missed"]
    score: int = 0
    submitted_at: Optional[UTCDateTime] = None
