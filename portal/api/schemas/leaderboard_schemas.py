from pydantic import BaseModel


class PointsUpdated(BaseModel):
    username: str
    points: int
    message: str
