from datetime import datetime, timezone
from typing import Annotated
from pydantic import AfterValidator


def as_utc(value: datetime) -> datetime:
    # the store hands back naive utc unless the client is tz aware
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UTCDateTime = Annotated[datetime, AfterValidator(as_utc)]


def bson_time(value: datetime) -> datetime:
    """naive utc, the form bson stores, so queries compare like with like"""
    return as_utc(value).replace(tzinfo=None)
